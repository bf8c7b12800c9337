"""Public surface for the safety verification feature."""

from .domain.models import Verdict, VerifyMode, VerifyReason, describe
from .usecases.verifier import verify

__all__ = ["Verdict", "VerifyMode", "VerifyReason", "describe", "verify"]
