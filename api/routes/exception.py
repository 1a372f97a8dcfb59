"""
Exception translation decorator for API route functions.

:func:`handle_exceptions` maps the engine's failures onto HTTP responses:

* :class:`ReportError` (an indicator could not be measured, or the report
  deadline passed) becomes ``502``, since the fault lies with the metrics
  backend rather than the request.
* :class:`ConfigurationError` raised while validating objectives supplied in
  the request becomes ``422``.
* :class:`HTTPException` passes through untouched; anything else is a ``500``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar, cast

from fastapi import HTTPException

from config import ConfigurationError
from engine.slo import ReportError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_exceptions(func: F) -> F:
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except ReportError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            log.exception("unhandled error in %s", func.__name__)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return cast(F, wrapper)
