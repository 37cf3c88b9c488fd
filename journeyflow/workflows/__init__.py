"""
Workflows package - Sample journey implementations.
"""

from journeyflow.workflows.onboarding import (
    OnboardingData,
    create_onboarding_executor,
    create_onboarding_graph,
)

__all__ = [
    "OnboardingData",
    "create_onboarding_executor",
    "create_onboarding_graph",
]
