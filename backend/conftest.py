"""
Fixtures compartilhadas: montam partes XML e pacotes .docx em memoria.
"""

import io
import zipfile

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def _wrap(body: str, root: str = "document") -> str:
    return f'<?xml version="1.0" encoding="UTF-8"?><w:{root} xmlns:w="{W_NS}">{body}</w:{root}>'


def _build_docx(parts: dict) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", "<Types/>")
        for name, content in parts.items():
            zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def w_xml():
    """Envolve um trecho de WordprocessingML no elemento raiz com o namespace w."""
    return _wrap


@pytest.fixture
def docx_factory():
    return _build_docx


@pytest.fixture
def sample_docx(w_xml, docx_factory):
    comments = w_xml(
        '<w:comment w:id="0" w:author="Ana"><w:p><w:r><w:t>Revisar prazo</w:t></w:r></w:p></w:comment>'
        '<w:comment w:id="4" w:author="Rui"><w:p><w:r><w:t>Valor "errado"</w:t></w:r></w:p>'
        '<w:p><w:r><w:t>ver anexo</w:t></w:r></w:p></w:comment>',
        root="comments",
    )
    document = w_xml(
        '<w:body><w:p>'
        '<w:commentRangeStart w:id="0"/>'
        '<w:r><w:rPr><w:highlight w:val="yellow"/></w:rPr><w:t>O prazo </w:t></w:r>'
        '<w:commentRangeStart w:id="4"/>'
        '<w:r><w:rPr><w:highlight w:val="yellow"/></w:rPr><w:t>de 30 dias</w:t></w:r>'
        '<w:commentRangeEnd w:id="0"/>'
        '<w:r><w:rPr><w:highlight w:val="red"/></w:rPr><w:t> custa R$ 10</w:t></w:r>'
        '<w:commentRangeEnd w:id="4"/>'
        '</w:p></w:body>'
    )
    numbering = w_xml(
        '<w:abstractNum w:abstractNumId="0"><w:lvl w:ilvl="0"><w:numFmt w:val="bullet"/></w:lvl></w:abstractNum>'
        '<w:num w:numId="1"><w:abstractNumId w:val="0"/></w:num>',
        root="numbering",
    )
    return docx_factory({
        "word/comments.xml": comments,
        "word/document.xml": document,
        "word/numbering.xml": numbering,
    })
