import logging
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from docx_annotations.analysis.xml_events import XmlEvent, iter_events
from docx_annotations.models.pydantic_models import Anomaly, AnomalyKind

logger = logging.getLogger(__name__)


# Estado comum dos extratores: registros em ordem e anomalias nao fatais.
# Cada process() recomeca do zero; subclasses estendem reset() e consume().
class PartExtractor:
    def __init__(self, part: Optional[str] = None):
        self.part = part
        self.reset()

    def reset(self):
        self.records: List[BaseModel] = []
        self.anomalies: List[Anomaly] = []

    def consume(self, events: Iterable[XmlEvent]):
        raise NotImplementedError

    def process(self, part_text: Union[str, bytes]):
        self.reset()
        self.consume(iter_events(part_text))
        return self

    def _report(self, kind: AnomalyKind, message: str):
        logger.warning("%s (%s): %s", self.part or "parte", kind.value, message)
        self.anomalies.append(Anomaly(kind=kind, message=message, part=self.part))

    def get_records(self) -> List[BaseModel]:
        return list(self.records)
