import io
import math

import pytest

from hepinfo import Counter

from conftest import produce_event


@pytest.mark.parametrize("e_cm", [10.0, 91.1876, 13000.0, 1.0e6])
def test_s_is_ecm_squared(ctx, e_cm):
    ctx.driver.set_beam_a(2212, 0.5 * e_cm, 0.5 * e_cm, 0.938)
    ctx.driver.set_beam_b(-2212, -0.5 * e_cm, 0.5 * e_cm, 0.938)
    ctx.driver.set_cm(e_cm)
    assert ctx.info.s() == e_cm * e_cm
    assert ctx.info.e_cm() == e_cm
    assert ctx.info.id_b() == -2212


def test_beam_fields(filled_ctx):
    info = filled_ctx.info
    assert (info.id_a(), info.pz_a(), info.e_a(), info.m_a()) == (2212, 6500.0, 6500.0, 0.938)
    assert (info.id_b(), info.pz_b(), info.e_b(), info.m_b()) == (2212, -6500.0, 6500.0, 0.938)


def test_reset_restores_defaults(filled_ctx):
    filled_ctx.process.set_sub_type("q g -> q g", 113, 2)
    filled_ctx.process.set_weight(0.25)
    filled_ctx.driver.reset()
    info = filled_ctx.info
    assert info.weight() == 1.0
    assert info.has_sub() is False
    assert info.name_sub() == ""
    assert info.n_final() == 0
    assert info.name() == ""
    assert info.code() == 0
    assert info.is_resolved() is False
    assert len(info.mpi_entries()) == 0
    assert info.n_mpi() == 0
    assert info.impact_parameter() is None
    assert info.b_mpi() == 1.0
    assert info.enhance_mpi() == 1.0
    assert info.e_mpi(0) == 1.0
    assert info.s_hat() == 0.0
    assert info.pt_max_fsr() == 0.0
    assert info.evolution_set() is False


def test_reset_keeps_run_level_state(filled_ctx):
    ctx = filled_ctx
    ctx.driver.set_counter(Counter.NEXT_CALLED, 5)
    ctx.driver.set_counter(Counter.EVENT_ACCEPTED, 2)
    ctx.process.set_sigma(100, 40, 10, 2.5, 0.1, 37.2)
    ctx.parton.record_diagnostic("pT below cutoff", "ISR")
    ctx.mpi.set_a0(0.3)
    ctx.driver.set_too_low_pt_min(True)

    ctx.driver.reset()

    info = ctx.info
    assert (info.get_counter(Counter.NEXT_CALLED), info.get_counter(Counter.EVENT_ACCEPTED)) == (5, 2)
    assert info.n_tried() == 100
    assert info.error_total_number() == 1
    assert info.a0_mpi() == 0.3
    assert info.too_low_pt_min() is True
    assert info.e_cm() == 13000.0


def test_process_and_kinematics(filled_ctx):
    info = filled_ctx.info
    assert info.name() == "g g -> g g"
    assert info.code() == 111
    assert info.n_final() == 2
    assert info.n_total() == 4
    assert info.is_resolved() is True
    assert info.is_min_bias() is False
    assert (info.id1(), info.id2()) == (21, 21)
    assert (info.pdf1(), info.pdf2()) == (3.5, 2.5)
    assert info.q2_fac() == 100.0
    assert info.q_fac() == 10.0
    assert info.q_ren() == 20.0
    assert (info.alpha_em(), info.alpha_s()) == (0.0073, 0.118)
    assert info.s_hat() == 67600.0
    assert info.m_hat() == 260.0
    assert (info.t_hat(), info.u_hat()) == (-200.0, -67400.0)
    assert info.pt_hat() == 10.0
    assert info.pt2_hat() == 100.0
    assert (info.theta_hat(), info.phi_hat()) == (0.1, 1.5)
    assert info.tau() == pytest.approx(0.0004)
    assert info.y() == pytest.approx(0.5 * math.log(0.25))


def test_y_without_partons(ctx):
    ctx.driver.reset()
    assert ctx.info.y() == 0.0


def test_set_type_forgets_previous_trial(filled_ctx):
    ctx = filled_ctx
    ctx.process.set_sub_type("q g -> q g", 113, 2)
    ctx.process.set_type("non-diffractive", 101, 0, is_min_bias=True)
    info = ctx.info
    assert info.has_sub() is False
    assert info.impact_parameter() is None
    assert info.evolution_set() is False
    assert info.is_min_bias() is True
    assert info.n_total() == 2


def test_sub_type(filled_ctx):
    filled_ctx.process.set_sub_type("q qbar -> g g", 115, 2)
    info = filled_ctx.info
    assert info.has_sub() is True
    assert (info.name_sub(), info.code_sub(), info.n_final_sub()) == ("q qbar -> g g", 115, 2)


def test_flags(ctx):
    ctx.driver.reset()
    ctx.process.set_type("LHA process", 9999, 3, is_resolved=False, is_diffractive_a=True, is_lha=True)
    ctx.driver.set_end_of_file(True)
    info = ctx.info
    assert info.is_lha() is True
    assert info.is_resolved() is False
    assert info.is_diffractive_a() is True
    assert info.is_diffractive_b() is False
    assert info.at_end_of_file() is True
    ctx.driver.reset()
    assert info.at_end_of_file() is False


def test_evolution_and_matching(filled_ctx):
    ctx = filled_ctx
    ctx.parton.set_pt_now(1.2)
    ctx.parton.set_valence(True, False)
    ctx.parton.set_history(True, z_now_isr=0.4, pt2_now_isr=2.25)
    info = ctx.info
    assert (info.pt_max_mpi(), info.pt_max_isr(), info.pt_max_fsr()) == (10.0, 10.0, 10.0)
    assert (info.n_isr(), info.n_fsr_in_proc(), info.n_fsr_in_res()) == (3, 2, 0)
    assert info.pt_now() == 1.2
    assert (info.is_valence1(), info.is_valence2()) == (True, False)
    assert (info.has_history(), info.z_now_isr(), info.pt2_now_isr()) == (True, 0.4, 2.25)


def test_events_do_not_leak(ctx):
    produce_event(ctx, n_mpi=4)
    ctx.process.set_weight(3.0)
    produce_event(ctx, n_mpi=1)
    assert ctx.info.weight() == 1.0
    assert len(ctx.info.mpi_entries()) == 1


def test_list_output(filled_ctx):
    out = io.StringIO()
    filled_ctx.info.list(out)
    text = out.getvalue()
    assert "hepinfo Info Listing" in text
    assert "g g -> g g" in text
    assert "Number of multiparton interactions: 2" in text
    assert "Impact parameter b" in text
    assert "End Info Listing" in text


def test_list_defaults_to_context_sink(ctx, sink):
    ctx.driver.reset()
    ctx.info.list()
    assert "hepinfo Info Listing" in sink.getvalue()


def test_to_dict(filled_ctx):
    d = filled_ctx.info.to_dict()
    assert d["beam_e_cm"] == 13000.0
    assert d["beam_s"] == 13000.0 ** 2
    assert d["name"] == "g g -> g g"
    assert d["has_sub"] is False
    assert d["mpi_codes"] == [111, 111]
    assert d["b_mpi"] == 0.8
    assert "sub" not in d
