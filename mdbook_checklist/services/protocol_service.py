"""Host protocol adapter.

Implements the mdBook preprocessor contract: a JSON ``[context, book]``
pair is read from stdin and the processed book is written back as JSON.
"""

import json
import logging
from typing import IO, Any

from ..config import ChecklistConfig
from ..domain.book import Book, BookFormatError
from ..domain.context import PreprocessorContext
from .checklist_service import ChecklistResult, ChecklistService

logger = logging.getLogger(__name__)


class ProtocolService:
    """Service speaking the preprocessor protocol with mdBook.

    Decoding errors are raised as ValueError subclasses and left to the
    caller; nothing is written until the whole book has been processed.
    """

    NAME = "checklist-preprocessor"

    def supports_renderer(self, renderer: str) -> bool:
        """The checklist only rewrites markdown, so every renderer is supported."""
        return True

    def parse_input(self, stream: IO[str]) -> tuple[PreprocessorContext, Book]:
        """Read and decode the ``[context, book]`` pair.

        Args:
            stream: Text stream holding the host's JSON payload.

        Returns:
            The decoded context and book.

        Raises:
            json.JSONDecodeError: If the payload is not valid JSON.
            BookFormatError: If the payload does not have the expected shape.
        """
        payload = json.load(stream)
        return self.decode_payload(payload)

    def decode_payload(self, payload: Any) -> tuple[PreprocessorContext, Book]:
        """Decode an already parsed JSON payload."""
        if not isinstance(payload, list) or len(payload) != 2:
            raise BookFormatError("Expected a [context, book] array on stdin")

        raw_context, raw_book = payload
        return PreprocessorContext.from_dict(raw_context), Book.from_dict(raw_book)

    def write_output(self, book: Book, stream: IO[str]) -> None:
        """Encode the book as JSON onto the output stream.

        The document is encoded completely before anything is written, so
        an encoding failure leaves the stream empty.
        """
        text = json.dumps(book.to_dict(), ensure_ascii=False)
        stream.write(text)
        stream.flush()

    def run(self, context: PreprocessorContext, book: Book) -> ChecklistResult:
        """Process a decoded book according to the context's configuration."""
        if context.mdbook_version and not ChecklistConfig.is_supported_version(
            context.mdbook_version
        ):
            logger.warning(
                "The %s plugin was written for mdbook %s.x, "
                "but is being called from version %s",
                self.NAME,
                ChecklistConfig.SUPPORTED_MDBOOK_VERSION,
                context.mdbook_version,
            )

        config = ChecklistConfig.from_context(context)
        logger.info("%s: Running checklist preprocessor", self.NAME)
        return ChecklistService(config=config).run(book)

    def handle_preprocessing(self, input_stream: IO[str], output_stream: IO[str]) -> Book:
        """Read the payload, process the book and write it back.

        Returns:
            The processed book.
        """
        context, book = self.parse_input(input_stream)
        result = self.run(context, book)
        self.write_output(result.book, output_stream)
        return result.book
