from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict

class Comment(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    text: str

class CommentedRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    text: str

class CommentPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    comment: str
    commented: str = ""

class HighlightedRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    color_id: int = Field(ge=0)
    text: str

class NumFmt(str, Enum):
    NONE = "none"
    BULLET = "bullet"
    DECIMAL = "decimal"
    OTHER = "other"

    @classmethod
    def read(cls, num_fmt: str) -> "NumFmt":
        if num_fmt in ("bullet", "decimal", "none"):
            return cls(num_fmt)
        return cls.OTHER

class NumberingEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    num_id: int = Field(ge=0)
    format: NumFmt

class AnomalyKind(str, Enum):
    UNBALANCED_RANGE = "unbalanced_range"
    TRAILING_TEXT = "trailing_text"
    UNCLOSED_COMMENT = "unclosed_comment"
    COLOR_COLLISION = "color_collision"

class Anomaly(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: AnomalyKind
    message: str
    part: Optional[str] = None

# --- Respostas da API ---
class CommentsResponse(BaseModel):
    records: List[Comment] = []
    anomalies: List[Anomaly] = []

class CommentedResponse(BaseModel):
    records: List[CommentedRange] = []
    anomalies: List[Anomaly] = []

class HighlightRecord(BaseModel):
    color_id: int
    color: str
    text: str

class HighlightsResponse(BaseModel):
    colors: Dict[int, str] = {}
    records: List[HighlightRecord] = []
    anomalies: List[Anomaly] = []

class NumberingResponse(BaseModel):
    records: List[NumberingEntry] = []

class HealthStatus(BaseModel):
    status: str
    environment: str
