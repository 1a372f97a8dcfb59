# datasources/exceptions.py

from typing import Optional


class DataSourceError(Exception):
    pass


class MeasurementError(DataSourceError):
    def __init__(self, message: str, indicator: Optional[str] = None):
        self.indicator = indicator
        super().__init__(f"{indicator}: {message}" if indicator else message)


class Unreachable(MeasurementError):
    pass


class BackendRejected(MeasurementError):
    def __init__(self, message: str, status: int, indicator: Optional[str] = None):
        self.status = status
        super().__init__(message, indicator)


class MalformedResponse(MeasurementError):
    pass


class NoData(MeasurementError):
    pass


class BackendStartupTimeout(DataSourceError):
    pass
