# logging_utils.py
"""
Shared structured logging utilities.

Goal:
- One place to define:
  * Run / execution ID
  * Log line format
  * Module "purposes" in human language

Format (one line per log entry):
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<ModulePurpose>|
<InvokingFunc>|<InvokingFuncPurpose>|<Detail>|<NextStep>|<Resolution>|<END>
"""

from __future__ import annotations

import datetime
import logging
import uuid
from typing import Dict, Optional

LOG_RUN_ID: str = uuid.uuid4().hex[:8]
# Alias for scripts that use RUN_ID
RUN_ID: str = LOG_RUN_ID


class StructuredFormatter(logging.Formatter):
    """
    Formatter that emits a single '|' separated line conforming
    to the log template above.
    """

    # High-level purposes by module name
    MODULE_PURPOSES: Dict[str, str] = {
        "cleaning": "Fail-soft parsing of stringified recipe fields",
        "normalizer": "Turn RawRecipeRecord rows into NormalizedRecipe objects",
        "food_com": "Read Food.com style CSV exports into RawRecipeRecord objects",
        "tfidf_index": "Build the TF-IDF index and score text queries against it",
        "catalog": "Filter and search the normalized recipe corpus",
        "recommender": "Blend IR baseline + personalization into ranked recipes",
        "store": "Row-level key-value storage for user settings / pantry / history",
        "preferences": "Typed reads and writes of user settings, context and history",
        "recommendation_example": "Command line demo of the recommender",
        "config": "Create Supabase client and ranking configuration",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        """Format log record into structured pipe-delimited format."""
        dt = datetime.datetime.fromtimestamp(record.created)
        date_str = dt.strftime("%Y-%m-%d")
        time_str = dt.strftime("%H:%M:%S")

        run_id = getattr(record, "run_id", RUN_ID)

        level = record.levelname
        code_location = f"{record.filename}:{record.lineno}"
        func_name = record.funcName
        module_name = record.module
        module_purpose = self.MODULE_PURPOSES.get(module_name, "")

        # Optional extra context supplied via logger calls
        invoking_func = getattr(record, "invoking_func", "")
        invoking_purpose = getattr(record, "invoking_purpose", "")
        next_step = getattr(record, "next_step", "")
        resolution = getattr(record, "resolution", "")

        detail = record.getMessage()
        if record.exc_info:
            detail = f"{detail} | EXC={record.exc_info[1]!r}"

        return (
            f"{run_id}|{date_str}|{time_str}|{level}|{code_location}|"
            f"{module_name}.{func_name}|{module_purpose}|"
            f"{invoking_func}|{invoking_purpose}|"
            f"{detail}|{next_step}|{resolution}|<END>"
        )


def init_logging(level: int = logging.INFO) -> None:
    """
    Initialize root logger once with our StructuredFormatter.

    Call get_logger() from modules instead of calling logging.basicConfig()
    everywhere, so configuration stays central.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (pytest, REPL, host app) - avoid double handlers
        return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger configured with structured formatting.

    Usage:
        logger = get_logger("my_module")
        logger.info(
            "Something happened",
            extra={
                "invoking_func": "some_function",
                "invoking_purpose": "High-level purpose",
                "next_step": "What happens next",
                "resolution": "How to fix if error",
            },
        )
    """
    init_logging()
    return logging.getLogger(name)


_script_logger = get_logger("recipe_ranker")


def _extra(
    invoking_function: str,
    invoking_purpose: str,
    next_step: str,
    resolution: str,
) -> Dict[str, str]:
    return {
        "invoking_func": invoking_function,
        "invoking_purpose": invoking_purpose,
        "next_step": next_step,
        "resolution": resolution,
    }


def log_info(
    message: str,
    *,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
) -> None:
    _script_logger.info(
        message,
        extra=_extra(invoking_function, invoking_purpose, next_step, resolution),
        stacklevel=2,
    )


def log_error(
    message: str,
    *,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
    exc: Optional[BaseException] = None,
) -> None:
    if exc is not None:
        message = f"{message} | EXC={exc!r}"
    _script_logger.error(
        message,
        extra=_extra(invoking_function, invoking_purpose, next_step, resolution),
        stacklevel=2,
    )
