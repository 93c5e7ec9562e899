import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def tracking_bed():
    from tracking.domain import tracking

    bed = DomainFixture(tracking)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(tracking_bed):
    with tracking_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _reset_manager():
    """Drop any manager a test installed so the next test starts clean."""
    from tracking.tracker import reset_tracking_manager

    yield
    reset_tracking_manager()
