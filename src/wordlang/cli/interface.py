"""CLI UI related functions"""

import logging
import sys
from traceback import format_exception

import colorful as cf

UI_COLORS = {
    "grey": "#777777",
    "red": "#991010",
}

# Flags that modify interface displays
QUIET = False


def init(args):
    """Initialise the UI, including logging"""

    if args["--vverbose"]:
        level = "DEBUG"
    elif args["--verbose"]:
        level = "INFO"
    else:
        level = None

    global QUIET
    QUIET = args["--quiet"]

    root_logger = logging.getLogger("wordlang")

    # Error lines go to stderr, so only colour them when it's a terminal
    if not args["--no-colours"] and sys.stderr.isatty():
        import coloredlogs

        cf.use_true_colors()
        cf.use_palette(UI_COLORS)
        if level:
            coloredlogs.install(
                fmt="[%(asctime)s.%(msecs)03d] %(name)-28s %(message)s",
                datefmt="%H:%M:%S",
                level=level,
                logger=root_logger,
            )
    else:
        cf.disable()
        if level:
            logging.basicConfig(level=level)
            root_logger.setLevel(level)


## String colour modifiers


def dim(string):
    return str(cf.grey(string))


def bad(string):
    return str(cf.bold_red(string))


def neutral(string):
    return str(cf.bold(string))


## And printing messages


def info(msg):
    if not QUIET:
        print(msg)


## graceful exits


def exit_error(line: int, msg: str):
    """Exit because of an error in the WordLang program"""
    sys.stderr.write(bad(f"ERROR (line {line}): {msg}") + "\n")
    sys.exit(1)


def exit_problem(problem: str, suggested_fix: str):
    """Exit because of a user-correctable problem"""
    sys.stderr.write(bad(f"ERROR: {problem}") + "\n")
    if suggested_fix:
        sys.stderr.write(suggested_fix.rstrip("\n") + "\n")
    sys.exit(1)


def exit_bug(msg):
    """Something broke unexpectedly while running"""
    sys.stderr.write(bad(f"ERROR: internal error.\n{msg}") + "\n")

    exc_type, exc_value, exc_traceback = sys.exc_info()
    if exc_type:
        sys.stderr.write(dim("".join(format_exception(exc_type, exc_value, exc_traceback))))

    sys.exit(1)
