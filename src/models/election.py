"""
Election results domain model.

Shape shared by the elections dashboard and the "election" kind of live
coverage update, which embeds a JSON-encoded copy of it.

Responsibility: Election results payload and its soft validation
"""

from typing import Optional, List, Literal
from pydantic import BaseModel, Field

# Percentages are expected to add up to 100 within this tolerance
PERCENTAGE_TOLERANCE = 5.0


class ElectionResult(BaseModel):
    """One candidate/list line of an election result."""

    candidate: str = Field(min_length=1, description="Candidate or list name")
    party: str = Field(description="Party label")
    votes: Optional[int] = Field(default=None, ge=0)
    percentage: float = Field(ge=0, le=100)
    color: str = Field(default="#6366f1", description="Chart colour (hex)")


class ElectionResultsData(BaseModel):
    """
    Chart-ready election results.

    Example:
        ElectionResultsData(
            title="Présidentielle 2022 - second tour",
            date="2022-04-24",
            type="presidential",
            round=2,
            results=[
                ElectionResult(candidate="A", party="P1", percentage=58.5, color="#1d4ed8"),
                ElectionResult(candidate="B", party="P2", percentage=41.5, color="#1e293b"),
            ],
        )
    """

    title: str = Field(min_length=1)
    date: str = Field(description="Election date (ISO 8601)")
    type: str = Field(description="presidential, legislative, local, ...")
    round: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = None
    total_votes: Optional[int] = Field(default=None, ge=0, alias="totalVotes")
    results: List[ElectionResult] = Field(min_length=1)
    display_type: Literal["bar", "pie"] = Field(default="bar", alias="displayType")

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        """Encode with the camelCase keys the chart renderer reads."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def percentage_total(results: List[ElectionResult]) -> float:
    return round(sum(result.percentage for result in results), 2)


def check_percentage_total(results: List[ElectionResult]) -> Optional[str]:
    """
    Soft check that percentages sum to roughly 100.

    Returns:
        A warning message, or None when the total is within tolerance
    """
    if not results:
        return None
    total = percentage_total(results)
    if abs(total - 100.0) <= PERCENTAGE_TOLERANCE:
        return None
    return f"Result percentages sum to {total}%, expected about 100%"

