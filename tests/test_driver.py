import io

import pytest

from hepinfo import Counter, GenerationContext, InfoConfig, RunConfig
from hepinfo.driver import LAMBDA_QCD, Q2_FREEZE, EventLoop, alpha_s, run_toy


def _run(n_events=200, seed=7, times_allowed_errors=1000, **kwargs):
    ctx = GenerationContext(InfoConfig(sink=io.StringIO()))
    config = RunConfig(n_events=n_events, seed=seed, times_allowed_errors=times_allowed_errors, **kwargs)
    return run_toy(config, ctx)


def test_toy_run_fills_every_role():
    ctx = _run()
    info = ctx.info
    assert info.id_a() == 2212
    assert info.s() == 13000.0 ** 2
    assert info.e_a() + info.e_b() == pytest.approx(13000.0)
    assert info.m_a() == pytest.approx(0.938, abs=1e-3)
    assert info.get_counter(Counter.NEXT_CALLED) == 200
    assert 0 < info.get_counter(Counter.EVENT_ACCEPTED) <= 200
    assert info.n_accepted() == info.get_counter(Counter.EVENT_ACCEPTED)
    assert info.n_tried() >= info.n_selected() >= info.n_accepted()
    assert info.sigma_gen() > 0.0
    assert info.weight_sum() == float(info.n_accepted())
    assert info.a0_mpi() == 1.0
    assert set(info.sigma_codes()) <= {0, 101, 111, 113, 114}


def test_toy_run_is_reproducible():
    a = _run(seed=3).info
    b = _run(seed=3).info
    assert a.sigma(0) == b.sigma(0)
    assert a.error_messages() == b.error_messages()


def test_accepted_event_is_complete():
    ctx = GenerationContext(InfoConfig(sink=io.StringIO()))
    loop = EventLoop(ctx, RunConfig(seed=11))
    while not loop.next():
        pass
    info = ctx.info
    assert info.evolution_set() is True
    assert info.n_mpi() == len(info.mpi_entries()) >= 1
    assert info.impact_parameter() is not None
    assert info.e_mpi(0) == info.enhance_mpi()
    assert info.s_hat() >= 4.0 * 2.0 ** 2
    assert info.pt_hat() >= 2.0
    assert info.code_mpi(0) == (info.code_sub() or info.code())


def test_abort_after_too_many_errors():
    ctx = _run(n_events=2000, times_allowed_errors=1)
    assert ctx.info.error_count("Abort from EventLoop::run:", "too many generation failures") == 1
    assert ctx.info.get_counter(Counter.NEXT_CALLED) < 2000


def test_low_pt_min_warning():
    ctx = _run(n_events=1, pt_min=0.5)
    assert ctx.info.too_low_pt_min() is True
    assert ctx.info.error_count("Warning in EventLoop::init:", "too low pTmin") == 1


def test_alpha_s_decreases():
    assert alpha_s(10.0) > alpha_s(1000.0) > 0.0


def test_alpha_s_frozen_at_low_scale():
    assert alpha_s(0.01) == alpha_s(LAMBDA_QCD ** 2) == alpha_s(Q2_FREEZE) > 0.0


def test_pt_min_below_lambda_runs():
    ctx = _run(n_events=20, pt_min=0.1)
    assert ctx.info.too_low_pt_min() is True
    assert ctx.info.n_accepted() > 0


def test_run_callback_sees_every_accepted_event():
    ctx = GenerationContext(InfoConfig(sink=io.StringIO()))
    loop = EventLoop(ctx, RunConfig(n_events=50, seed=5, times_allowed_errors=1000))
    seen = []
    n_ok = loop.run(lambda c: seen.append(c.info.n_accepted()))
    assert n_ok == len(seen) == ctx.info.n_accepted()
    assert seen == list(range(1, n_ok + 1))
    assert loop.aborted is False


def test_aborted_flag_set():
    ctx = GenerationContext(InfoConfig(sink=io.StringIO()))
    loop = EventLoop(ctx, RunConfig(n_events=2000, seed=7, times_allowed_errors=1))
    loop.run()
    assert loop.aborted is True


def test_invalid_run_config():
    with pytest.raises(ValueError):
        RunConfig(e_cm=0.0)
    with pytest.raises(ValueError):
        RunConfig(n_events=-1)
