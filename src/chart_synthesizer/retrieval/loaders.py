"""
Document loaders keyed by media type.

Each loader turns an uploaded document into LangChain ``Document`` chunks.
Dispatch goes through a lookup table, so supporting a new format means
registering a loader, not touching the pipeline.
"""

import io
from functools import partial
from typing import Callable, Dict, List, Mapping, Optional

import pandas as pd
from langchain_core.documents import Document

from chart_synthesizer.core.exceptions import UnsupportedFormatError
from chart_synthesizer.models.documents import UploadedDocument, normalize_media_type
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

DocumentLoader = Callable[[UploadedDocument], List[Document]]


def load_delimited_text(document: UploadedDocument, sep: str = ",") -> List[Document]:
    """
    Load a delimited-text table, one chunk per row.

    Each chunk lists the row as ``column: value`` lines, so the model sees the
    header next to every value.

    Args:
        document: Uploaded tabular document
        sep: Field delimiter

    Returns:
        List of Documents with ``source`` and ``row`` metadata

    Raises:
        UnsupportedFormatError: If the bytes cannot be parsed as a table or
            the table has no rows
    """
    try:
        frame = pd.read_csv(
            io.BytesIO(document.content),
            sep=sep,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            skipinitialspace=True,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error(f"[Loader] Could not parse tabular document '{document.source}': {e}")
        raise UnsupportedFormatError(
            f"Document could not be parsed as delimited text: {e}",
            media_type=document.media_type,
        ) from e

    if frame.empty:
        raise UnsupportedFormatError(
            "Tabular document has a header but no rows",
            media_type=document.media_type,
        )

    columns = [str(column).strip() for column in frame.columns]
    chunks = []
    for row_index, row in enumerate(frame.itertuples(index=False, name=None)):
        content = "\n".join(
            f"{column}: {str(value).strip()}" for column, value in zip(columns, row)
        )
        chunks.append(
            Document(
                id=f"{document.source}:{row_index}",
                page_content=content,
                metadata={"source": document.source, "row": row_index},
            )
        )

    logger.info(
        f"[Loader] Loaded {len(chunks)} row chunk(s) with {len(columns)} column(s) "
        f"from '{document.source}'"
    )
    return chunks


load_csv = partial(load_delimited_text, sep=",")
load_tsv = partial(load_delimited_text, sep="\t")

DEFAULT_LOADERS: Dict[str, DocumentLoader] = {
    "text/csv": load_csv,
    "application/csv": load_csv,
    "text/tab-separated-values": load_tsv,
}


def resolve_loader(
    media_type: Optional[str],
    loaders: Optional[Mapping[str, DocumentLoader]] = None,
) -> DocumentLoader:
    """
    Look up the loader for a media type.

    Args:
        media_type: Declared media type, parameters allowed
        loaders: Loader table (defaults to DEFAULT_LOADERS)

    Returns:
        Loader callable

    Raises:
        UnsupportedFormatError: If no loader is registered for the type
    """
    table = DEFAULT_LOADERS if loaders is None else loaders
    normalized = normalize_media_type(media_type)
    loader = table.get(normalized)
    if loader is None:
        logger.warning(f"[Loader] Unsupported media type: '{media_type}'")
        raise UnsupportedFormatError(
            f"Unsupported file format '{media_type}'. "
            f"Supported: {', '.join(sorted(table))}",
            media_type=media_type,
        )
    return loader


def is_supported(
    media_type: Optional[str],
    loaders: Optional[Mapping[str, DocumentLoader]] = None,
) -> bool:
    table = DEFAULT_LOADERS if loaders is None else loaders
    return normalize_media_type(media_type) in table
