"""HealthRisk - questionnaire risk scoring and report service."""

from .config import API_VERSION

__version__ = API_VERSION
