import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_config_env():
    """Hide any ``CHGLOG_CONFIG`` set in the calling environment.

    Tests expect the configuration to come from the repository or from
    an explicit path only. The variable is restored after the session.
    """
    saved = os.environ.pop("CHGLOG_CONFIG", None)
    try:
        yield
    finally:
        if saved is not None:
            os.environ["CHGLOG_CONFIG"] = saved
