"""Thread data models."""

from pydantic import BaseModel, Field


class ThreadRecommendation(BaseModel):
    """Answer of a thread-data query for one diameter."""

    thread_type: str = Field(description="Thread family, e.g. 'ISO Metric profile'")
    designation: str = Field(description="Thread designation, e.g. 'M5x0.8'")
    thread_class: str = Field(description="Tolerance class, e.g. '6g'")

    model_config = {"frozen": True}


class ThreadInfo(BaseModel):
    """Thread definition applied to a cylindrical face."""

    is_internal: bool = Field(default=False, description="Internal (tapped) or external thread")
    thread_type: str = Field(description="Thread family")
    designation: str = Field(description="Thread designation")
    thread_class: str = Field(description="Tolerance class")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "is_internal": False,
                "thread_type": "ISO Metric profile",
                "designation": "M5x0.8",
                "thread_class": "6g",
            }
        }
    }

    @classmethod
    def from_recommendation(cls, recommendation: ThreadRecommendation, is_internal: bool = False) -> "ThreadInfo":
        """Build thread info from a thread-data recommendation."""
        return cls(
            is_internal=is_internal,
            thread_type=recommendation.thread_type,
            designation=recommendation.designation,
            thread_class=recommendation.thread_class,
        )
