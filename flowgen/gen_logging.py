"""
Logging for flow compilation.

Every generator module logs under "flowgen.gen", one child per module
(flowgen.gen.endpoint, flowgen.gen.project_generator, ...). Messages carry a
bracketed tag naming what happened:

    [GENERATE]   start and summary of one compilation (INFO)
    [ENDPOINT]   URI built for an endpoint step (DEBUG)
    [MAPPING]    mapping document written for a mapper step (DEBUG)
    [SKIP]       step that produced no route element (DEBUG)
    [STOP]       visitor ended the traversal before the last step (DEBUG)
    [POM]        dependency count of the build descriptor (DEBUG)
    [RESOURCE]   additional resource copied into the project (DEBUG)
    [GENERATED]  file written by write_artifacts (DEBUG)

Skipped dependency coordinates ([WARN]) and replaced visitor factories
([REGISTRY]) are reported at WARNING.
"""

import logging
import sys

_LOGGER_NAME = "flowgen.gen"


def get_logger(name: str = None) -> logging.Logger:
    """
    Return the compilation logger for a module.

    "flowgen.generator.visitors.endpoint" maps to "flowgen.gen.endpoint";
    None returns the "flowgen.gen" parent itself.
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Route compilation logs to stderr, keeping stdout for command output
    (`flowgen pom` prints the build descriptor there).

    -v shows the per-step tags, -q keeps only warnings, the default shows the
    [GENERATE] lines.
    """
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO

    gen_logger = logging.getLogger(_LOGGER_NAME)
    gen_logger.setLevel(level)

    # sys.stderr may differ between invocations in one process
    for old_handler in list(gen_logger.handlers):
        gen_logger.removeHandler(old_handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_TagFormatter())
    gen_logger.addHandler(handler)
    gen_logger.propagate = False


class _TagFormatter(logging.Formatter):
    """Messages already start with their tag; print them bare."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()
