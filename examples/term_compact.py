"""Log a couple of records to the terminal in compact layout.

Run from the repository root:
    python examples/term_compact.py
"""

from pathlib import Path

from logdrain.loggings import setup_logger


CONFIG_PATH = Path(__file__).parent / "term-compact.toml"


def main():
    logger = setup_logger(
        config_path=CONFIG_PATH,
        name="examples.term_compact",
        context={"test": "term_compact"},
    )

    logger.warning("test warning")
    logger.info("test complete", extra={"elapsed_ms": 3})


if __name__ == "__main__":
    main()
