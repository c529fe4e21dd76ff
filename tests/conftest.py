import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from career_match_ai.schemas.recommendation import RecommendationRecord  # noqa: E402


def make_record(title: str) -> RecommendationRecord:
    return RecommendationRecord(
        role_title=title,
        description=f"{title} description",
        why_it_fits_professionally=f"{title} professional fit",
        why_it_fits_personally=f"{title} personal fit",
    )


@pytest.fixture
def discovery_data():
    return {
        "skills": {"selected": ["Python", "SQL"], "additional_info": "Built dashboards"},
        "interests": {"selected": ["Data"], "additional_info": ""},
        "values": {"selected": ["Autonomy"], "additional_info": "Remote work"},
        "timestamp": "2024-05-01T10:00:00+00:00",
    }
