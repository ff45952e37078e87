"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

from deskcalc import CommandDispatcher, EvaluationEngine, ManualScheduler

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


@pytest.fixture
def engine():
    """Provide a fresh EvaluationEngine in normal mode."""
    return EvaluationEngine()


@pytest.fixture
def scheduler():
    """Scheduler whose error-revert callbacks only run on demand."""
    return ManualScheduler()


@pytest.fixture
def renders():
    """Collects every (text, is_error) pair passed to the render callback."""
    return []


@pytest.fixture
def calc(scheduler, renders):
    """Provide a CommandDispatcher wired to the manual scheduler."""
    return CommandDispatcher(
        scheduler=scheduler, on_render=lambda text, error: renders.append((text, error))
    )


@pytest.fixture
def programmer(calc):
    """Dispatcher already switched to programmer mode (base DEC)."""
    calc.dispatch("PROG_DISP")
    return calc


@pytest.fixture
def press(calc):
    """Dispatch whitespace-separated tokens and return the display text."""

    def _press(tokens):
        for token in tokens.split():
            calc.dispatch(token)
        return calc.display_text

    return _press
