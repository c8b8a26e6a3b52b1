"""Logging setup."""

from loguru import logger

from storefront import logger as store_logger


def test_console_sink_writes_to_stdout(tmp_path, capsys):
    store_logger.setup(log_dir=tmp_path / "logs")
    try:
        store_logger.get("CART").info("cart refreshed")
    finally:
        logger.remove()

    captured = capsys.readouterr()
    assert "cart refreshed" in captured.out
    assert "cart refreshed" not in captured.err
    assert list((tmp_path / "logs").glob("storefront_*.log"))
