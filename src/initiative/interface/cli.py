"""
Interactive command line for initiative.sh.

Usage:
    initiative [--data-dir DIR] [--store json|memory|null] [--headless]
    initiative --store memory --no-banner --save-config
"""

import argparse
import logging

from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory

from ..app.app import App
from ..storage.store import open_data_store
from .config import STORE_CHOICES, load_config, update_config
from .renderer import THEME, console, pt_style, render_output

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Completion
# -----------------------------------------------------------------------------

class InitiativeCompleter(Completer):
    """Completes the whole line using the app's own autocomplete."""

    def __init__(self, app: App):
        self.app = app

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor.lstrip()
        if not text:
            return

        for suggestion, summary in self.app.autocomplete(text):
            yield Completion(
                suggestion,
                start_position=-len(text),
                display=suggestion,
                display_meta=summary,
            )


# -----------------------------------------------------------------------------
# Main Loop
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="initiative.sh - a game master's assistant")
    parser.add_argument("--data-dir", help="Directory holding the journal")
    parser.add_argument("--store", choices=STORE_CHOICES, help="Where to keep saved entries")
    parser.add_argument("--seed", type=int, help="Seed the random generator (for reproducible sessions)")
    parser.add_argument("--no-banner", "-q", action="store_true", help="Skip the welcome text")
    parser.add_argument("--headless", action="store_true", help="JSON lines on stdin/stdout")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--save-config", action="store_true", help="Save the given flags as defaults and exit")
    return parser


def save_flags(args: argparse.Namespace, config_dir: str = ".") -> None:
    """Persist the flags that were given on this command line."""
    changes = {}
    if args.data_dir:
        changes["data_dir"] = args.data_dir
    if args.store:
        changes["store"] = args.store
    if args.no_banner:
        changes["show_banner"] = False
    if args.log_level:
        changes["log_level"] = args.log_level

    if not changes:
        console.print(f"[{THEME['dim']}]Nothing to save.[/{THEME['dim']}]")
        return

    try:
        update_config(config_dir, **changes)
    except ValueError as e:
        console.print(f"[{THEME['error']}]{e}[/{THEME['error']}]")
        raise SystemExit(1) from e
    console.print(f"Saved {', '.join(sorted(changes))}.")


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.save_config:
        save_flags(args)
        return

    # Command line flags override saved config
    config = load_config()
    data_dir = args.data_dir or config.get("data_dir", "initiative_data")
    store = args.store or config.get("store", "json")
    log_level = (args.log_level or config.get("log_level", "WARNING")).upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s [%(levelname)s] %(message)s',
    )

    if args.headless:
        from .headless import run_headless
        run_headless(store=store, data_dir=data_dir, seed=args.seed)
        return

    app = App(open_data_store(store, data_dir), seed=args.seed)
    welcome = app.init()
    if config.get("show_banner", True) and not args.no_banner:
        render_output(welcome)
    elif not app.repository.data_store_enabled:
        console.print(f"[{THEME['error']}]Your journal could not be loaded.[/{THEME['error']}]")

    completer = InitiativeCompleter(app)
    history = InMemoryHistory()
    interrupted = False

    while True:
        try:
            user_input = pt_prompt(
                "> ",
                completer=completer,
                history=history,
                style=pt_style,
                complete_while_typing=True,
            ).strip()
            interrupted = False

            if not user_input:
                continue

            render_output(app.command(user_input))

        except KeyboardInterrupt:
            if interrupted:
                break
            interrupted = True
            console.print(f"[{THEME['dim']}]Press Ctrl-C again or Ctrl-D to exit[/{THEME['dim']}]")
        except EOFError:
            break


if __name__ == "__main__":
    main()
