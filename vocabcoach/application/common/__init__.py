from .result import Failure, Result, Success

__all__ = ["Failure", "Result", "Success"]
