import os

import pytest


@pytest.fixture(scope='module')  # type: ignore
def creds() -> str:
    path = os.environ.get('GOOGLE_APPLICATION_CREDENTIALS')
    if not path:
        pytest.skip('GOOGLE_APPLICATION_CREDENTIALS is not set')
    return path


@pytest.fixture(scope='module')  # type: ignore
def kind() -> str:
    return 'public_test'


@pytest.fixture(scope='module')  # type: ignore
def project() -> str:
    return os.environ.get('DATASTORE_TEST_PROJECT', 'dialpad-oss')
