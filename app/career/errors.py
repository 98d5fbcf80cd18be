from __future__ import annotations


class CareerAnalysisError(RuntimeError):
    """Base for every failure the analysis pipeline reports to a caller."""

    code = "internal"
    status_code = 500
    default_message = "Career analysis failed. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class Unauthorized(CareerAnalysisError):
    code = "unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class InsufficientData(CareerAnalysisError):
    code = "bad_input"
    status_code = 400
    default_message = "No assessment data found. Please complete the assessment first."


class UpstreamRateLimited(CareerAnalysisError):
    code = "rate_limited"
    status_code = 429
    default_message = "Rate limits exceeded. Please try again later."


class UpstreamBillingExhausted(CareerAnalysisError):
    code = "payment_required"
    status_code = 402
    default_message = "AI credits exhausted. Please add credits."


class UpstreamFailure(CareerAnalysisError):
    default_message = "AI request failed"


class StoreFailure(CareerAnalysisError):
    default_message = "Could not read or save career data."
