import pytest

from nrr_api import cache
from nrr_api.models import RequirementQuery, TeamId
from nrr_api.table_provider import create_mock_ipl_table


@pytest.fixture
def table():
    return create_mock_ipl_table()


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_query():
    def _make(acting, opponent, runs, desired_rank, scenario="batting_first", strategy="live", match_overs=20.0):
        return RequirementQuery(
            acting_team=TeamId(acting),
            opponent_team=TeamId(opponent),
            match_overs=match_overs,
            desired_rank=desired_rank,
            scenario=scenario,
            runs=runs,
            strategy=strategy,
        )

    return _make
