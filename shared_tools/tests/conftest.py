"""Shared fixtures: authorizers with scripted operator answers."""

import io

import pytest

from shared_tools.app.authorizer import Authorizer


def scripted_authorizer(answer: str) -> Authorizer:
    """Ask-mode authorizer whose operator always types ``answer``."""
    return Authorizer(
        auto_execute=False,
        stdin=io.StringIO(),
        stdout=io.StringIO(),
        read_char=lambda stream: answer,
    )


@pytest.fixture()
def auto():
    return Authorizer(auto_execute=True)


@pytest.fixture()
def approve():
    return scripted_authorizer("y")


@pytest.fixture()
def decline():
    return scripted_authorizer("n")


@pytest.fixture()
def restore_policy():
    """Put the process-wide policy back after a test changes it."""
    from shared_tools.app import authorizer
    saved = authorizer.get_policy()
    yield
    authorizer.set_policy(saved)
