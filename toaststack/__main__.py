from __future__ import annotations

import argparse

from toaststack.config.toasts import ConfigError, DismissMode
from toaststack.messages.models import FlashMessage


def _parse_message(value: str) -> FlashMessage:
    flash_type, sep, text = value.partition(":")
    if not sep or not flash_type.strip() or not text.strip():
        raise argparse.ArgumentTypeError(f"expected TYPE:TEXT, got {value!r}")
    return FlashMessage(flash_type.strip(), text.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toaststack",
        description="Stacked toast notifications in the terminal",
    )
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("--limit", type=int, help="Maximum toasts shown at once (0 = all)")
    parser.add_argument(
        "--dismiss",
        choices=[mode.value for mode in DismissMode],
        help="How toasts are dismissed manually",
    )
    parser.add_argument(
        "-m",
        "--message",
        action="append",
        default=[],
        type=_parse_message,
        metavar="TYPE:TEXT",
        help="Toast to show on startup (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    from toaststack.app import ToastStackApp

    try:
        app = ToastStackApp(
            config_path=args.config,
            limit=args.limit,
            dismiss=args.dismiss,
            messages=args.message,
            verbose=args.verbose,
        )
    except ConfigError as exc:
        parser.error(str(exc))
    app.run()


if __name__ == "__main__":
    main()
