from typing import Optional


# Hierarquia de erros da extracao. Anomalias estruturais nao fatais ficam em
# models.pydantic_models.Anomaly e nunca sao levantadas.
class ExtractionError(Exception):
    pass


# O arquivo nao pode ser aberto ou nao e um zip valido.
class ArchiveError(ExtractionError):
    pass


class PartNotFoundError(ExtractionError):
    def __init__(self, part: str):
        super().__init__(f".docx invalido: nao contem {part}")
        self.part = part


class MalformedAttributeError(ExtractionError):
    def __init__(self, tag: str, key: str, value: Optional[str] = None):
        if value is None:
            message = f"atributo '{key}' ausente na tag '{tag}'"
        else:
            message = f"atributo '{key}' da tag '{tag}' invalido: {value!r}"
        super().__init__(message)
        self.tag = tag
        self.key = key
        self.value = value


# Violacao de invariante interna (ex.: numId sem abstractNum correspondente).
class MalformedStructureError(ExtractionError):
    pass


class MalformedXmlError(ExtractionError):
    pass
