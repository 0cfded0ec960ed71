"""Filter Options Route — dropdown catalogues for branch, district and caste selectors."""

from fastapi import APIRouter

from seatfinder.core.domain_types import (
    BRANCH_CODES, CASTE_GROUPS, DISTRICT_CODES, Category,
)
from seatfinder.schemas.seats import OptionsResponse

router = APIRouter(prefix="/api/v1/options", tags=["options"])


@router.get("", response_model=OptionsResponse)
async def get_filter_options():
    """Branch codes, district codes, the 18 categories and caste groups."""
    return OptionsResponse(
        branches=list(BRANCH_CODES),
        districts=list(DISTRICT_CODES),
        categories=[c.value for c in Category],
        caste_groups={
            group.value: [c.value for c in categories]
            for group, categories in CASTE_GROUPS.items()
        },
    )
