"""Entry point of one run: reads the script parameters and dispatches the mode."""
from core.controller import CarrierController
from core.errors import HostSignal, RowsNotCreatedError
from core.exit_codes import ExitCode
from core.logging import get_logger

log = get_logger(__name__)

MODE_PARAM = "Mode"
INDEX_REFERENCE_PARAM = "IndexReference"


def run_safe(engine, element, config=None, clock=None):
    mode = engine.get_script_param(MODE_PARAM)
    index_reference = engine.get_script_param(INDEX_REFERENCE_PARAM)
    log.debug("mode=%s index_reference=%r", mode, index_reference, extra={"mode": mode})

    kwargs = {"clock": clock} if clock is not None else {}
    controller = CarrierController(element, engine, config, **kwargs)
    try:
        controller.dispatch(mode, index_reference)
    except RowsNotCreatedError as e:
        engine.exit_fail(str(e), code=ExitCode.ROWS_NOT_CREATED)


def run(engine, element, config=None, clock=None):
    """Сигналы среды (HostSignal, KeyboardInterrupt) пробрасываются как есть,
    любая другая ошибка ведёт к фатальному выходу с текстом исключения."""
    try:
        run_safe(engine, element, config, clock)
    except HostSignal:
        raise
    except Exception as e:
        log.debug("run failed", exc_info=True, extra={"error_type": type(e).__name__})
        engine.exit_fail(f"Run|Something went wrong: {type(e).__name__}: {e}")
