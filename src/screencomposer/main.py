"""
Application Initialization
==========================
This module wires the Model-View-Controller pieces together and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Instantiates the RenderController (which owns the AppState).
3. Instantiates the Main Window (View) and passes the controller in.
4. Kicks off the first template load.
"""
import argparse
import sys
from typing import Optional

from screencomposer.app import create_app
from screencomposer.config import MEDIA_PATH
from screencomposer.controller.render import RenderController
from screencomposer.logging_config import level_for, setup_logging
from screencomposer.view.main_window import MainWindow


def parse_args(argv: Optional[list[str]] = None) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(prog="screencomposer", description="Composite text onto screen templates.")
    parser.add_argument("--single-mode", action="store_true", help="Dashboard template only, no tabs.")
    parser.add_argument("--media-dir", default=MEDIA_PATH, help="Directory holding the template images.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    # Unknown arguments are left for Qt (-platform, -style, ...)
    return parser.parse_known_args(argv)


def main() -> None:
    args, qt_args = parse_args(sys.argv[1:])

    setup_logging(level=level_for(args.debug), log_file=args.log_file)

    app = create_app([sys.argv[0]] + qt_args)

    controller = RenderController(media_dir=args.media_dir, single_mode=args.single_mode)

    window = MainWindow(controller)
    window.show()

    controller.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
