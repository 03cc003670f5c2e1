"""AI assisted estimating: prompts, regional pricing, image prep and the generator."""

from .errors import AIConfigurationError, AIError, AIServiceError, EstimateParseError
from .estimator import EstimateGenerator, parse_estimate_response, strip_code_fence
from .models import EstimateLineItem, EstimateMeasurements, GeneratedEstimate

__all__ = [
    "AIConfigurationError",
    "AIError",
    "AIServiceError",
    "EstimateGenerator",
    "EstimateLineItem",
    "EstimateMeasurements",
    "EstimateParseError",
    "GeneratedEstimate",
    "parse_estimate_response",
    "strip_code_fence",
]
