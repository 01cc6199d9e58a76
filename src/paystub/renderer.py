"""Turns a composed statement into a downloadable artifact.

The PDF is produced in a dedicated worker process per render so that a hung
or crashing layout can be abandoned. Whatever goes wrong there, the caller
still gets the statement: the styled HTML markup of the same tree.
"""
from __future__ import annotations

import multiprocessing
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol

from .config import Settings, get_settings
from .document import DocumentTree
from .errors import RenderBackendError, RenderTimeout
from .logging import get_logger
from .markup import DOCTYPE, render_html
from .observability import fallback_counter, render_counter, tracer
from .options import Margins, RenderOptions
from .pdf import build_story, write_pdf

logger = get_logger(__name__)

CONTENT_TYPES = {"pdf": "application/pdf", "html": "text/html"}
SNIFF_BYTES = 15
RELEASE_GRACE_SECONDS = 5.0


@dataclass(frozen=True)
class RenderResult:
    kind: Literal["pdf", "html"]
    content: bytes

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.kind]

    @property
    def filename(self) -> str:
        return f"paystub.{self.kind}"


def looks_like_html(content: bytes) -> bool:
    """Legacy check for callers that only see bytes."""
    return DOCTYPE[:9].encode("ascii") in content[:SNIFF_BYTES]


class PdfBackend(Protocol):
    def render(self, tree: DocumentTree, options: RenderOptions) -> bytes:
        ...


def _pdf_worker(conn, tree: DocumentTree, options: RenderOptions) -> None:
    try:
        story = build_story(tree)
        conn.send(("loaded", None))
        conn.send(("pdf", write_pdf(story, options)))
    except Exception as exc:
        conn.send(("error", f"{type(exc).__name__}: {exc}"))
    finally:
        conn.close()


def _release(process) -> None:
    if process.pid is None:
        return
    if process.is_alive():
        process.terminate()
        process.join(RELEASE_GRACE_SECONDS)
    if process.is_alive():
        process.kill()
    process.join()
    process.close()


class ProcessPdfBackend:
    """Runs the reportlab layout in a child process with two phase timeouts.

    ``content load`` covers start-up and building the flowables, ``render``
    covers producing the bytes. The child and both pipe ends are released
    before ``render`` returns or raises.
    """

    def __init__(
        self,
        content_load_timeout: float = 30.0,
        render_timeout: float = 30.0,
        start_method: str = "spawn",
        target: Any = _pdf_worker,
    ):
        self.content_load_timeout = content_load_timeout
        self.render_timeout = render_timeout
        self.start_method = start_method
        self.target = target

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProcessPdfBackend":
        return cls(
            content_load_timeout=settings.content_load_timeout,
            render_timeout=settings.render_timeout,
            start_method=settings.render_start_method,
        )

    @staticmethod
    def _await(receiver, expected: str, timeout: float, phase: str) -> Any:
        if not receiver.poll(timeout):
            raise RenderTimeout(phase, timeout)
        try:
            tag, payload = receiver.recv()
        except EOFError as exc:
            raise RenderBackendError(f"PDF worker exited during {phase}") from exc
        if tag == "error":
            raise RenderBackendError(payload)
        if tag != expected:
            raise RenderBackendError(f"unexpected {tag!r} message during {phase}")
        return payload

    def render(self, tree: DocumentTree, options: RenderOptions) -> bytes:
        context = multiprocessing.get_context(self.start_method)
        receiver, sender = context.Pipe(duplex=False)
        process = context.Process(target=self.target, args=(sender, tree, options), daemon=True)
        try:
            try:
                process.start()
            except OSError as exc:
                raise RenderBackendError(f"could not start PDF worker: {exc}") from exc
            sender.close()
            self._await(receiver, "loaded", self.content_load_timeout, "content load")
            return self._await(receiver, "pdf", self.render_timeout, "render")
        finally:
            receiver.close()
            sender.close()
            _release(process)


class Renderer:
    def __init__(self, backend: Optional[PdfBackend] = None, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.backend = backend or ProcessPdfBackend.from_settings(settings)
        self.default_options = RenderOptions(
            page_format=settings.page_format, margins=Margins.uniform(settings.margin)
        )

    def render(self, tree: DocumentTree, options: Optional[RenderOptions] = None) -> RenderResult:
        options = options or self.default_options
        markup = render_html(tree, options)
        with tracer.start_as_current_span("paystub.render") as span:
            span.set_attribute("paystub.watermark", options.watermark)
            span.set_attribute("paystub.page_format", options.page_format)
            logger.info("render_started", watermark=options.watermark, page_format=options.page_format)
            try:
                content = self.backend.render(tree, options)
                if not content:
                    raise RenderBackendError("PDF backend returned no bytes")
            except Exception as exc:
                logger.warning("render_fallback", error=str(exc), error_type=type(exc).__name__, exc_info=True)
                fallback_counter.add(1, {"error_type": type(exc).__name__})
                result = RenderResult(kind="html", content=markup.encode("utf-8"))
            else:
                result = RenderResult(kind="pdf", content=content)
            span.set_attribute("paystub.render.kind", result.kind)
        render_counter.add(1, {"kind": result.kind})
        logger.info("render_finished", kind=result.kind, size=len(result.content))
        return result


def render(
    tree: DocumentTree, options: Optional[RenderOptions] = None, backend: Optional[PdfBackend] = None
) -> RenderResult:
    return Renderer(backend=backend).render(tree, options)
