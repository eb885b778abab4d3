import logging

from inkwell.infrastructure.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
    setup_logging,
)


def test_records_carry_the_correlation_id():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record["extra"]["correlation_id"]))
    try:
        set_correlation_id("req-42")
        logger.info("inside request")
        clear_correlation_id()
        logger.info("outside request")
    finally:
        logger.remove(sink_id)
    assert records == ["req-42", "-"]
    assert get_correlation_id() == "-"


def test_stdlib_logging_is_intercepted(tmp_path):
    log_file = tmp_path / "inkwell.log"
    setup_logging("DEBUG", str(log_file))
    logging.getLogger("uvicorn.error").warning("hello from uvicorn")
    logger.complete()
    setup_logging("INFO")
    assert "hello from uvicorn" in log_file.read_text(encoding="utf-8")
