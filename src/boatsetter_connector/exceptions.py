"""
Custom Exceptions for Boatsetter Connector
===========================================
"""


class BoatsetterError(Exception):
    """Base exception for Boatsetter connector errors"""
    
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotInitializedError(BoatsetterError):
    """Operation attempted while the browser session is not ready"""
    
    def __init__(self, state: str = None):
        message = "Connector not initialized. Call initialize() or use 'async with'."
        if state:
            message += f" (session state: {state})"
        super().__init__(message, {"state": state})
        self.state = state


class MonthLabelError(BoatsetterError):
    """Calendar header text could not be read as 'Month YYYY'"""
    
    def __init__(self, label: str = None):
        super().__init__(f"Unrecognized calendar month label: {label!r}")
        self.label = label


class InvalidInputError(BoatsetterError):
    """Invalid input parameters"""
    
    def __init__(self, param: str, message: str):
        super().__init__(f"Invalid parameter '{param}': {message}")
        self.param = param
