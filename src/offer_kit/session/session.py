# session/session.py

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal, TypeVar

from offer_kit.compliance.classifier import ComplianceClassifier, FlagMap, SeveritySummary
from offer_kit.compliance.forms import RuleForm
from offer_kit.compliance.report import ComplianceReport, build_report
from offer_kit.compliance.rule import ComplianceRule
from offer_kit.compliance.rulebook import RuleBook, RuleValidationError
from offer_kit.compliance.sentences import Sentence, split_sentences
from offer_kit.compliance.sync import RuleSyncClient, SyncResult
from offer_kit.config import EraseMode, SessionConfig
from offer_kit.export.exporter import ExportResult, PdfExporter, offer_letter_filename
from offer_kit.export.text_layout import layout_text_pdf
from offer_kit.observability import names as metric_names
from offer_kit.observability.base import MetricsHook, NoOpMetricsHook
from offer_kit.parsers.base import ExtractionError
from offer_kit.parsers.layout import layout_text
from offer_kit.parsers.models import ExtractedDocument
from offer_kit.parsers.pdf_parser import PdfExtractor
from offer_kit.parsers.text_parser import TextExtractor
from offer_kit.rendering.flat import substitute_text
from offer_kit.rendering.instructions import Instruction, TextMeasurer, Viewport
from offer_kit.rendering.renderer import SubstitutionRenderer
from offer_kit.rendering.surfaces import FitzTextMeasurer, render_page_png
from offer_kit.suggestions.base import EntitySuggester
from offer_kit.templates.models import TokenMatch
from offer_kit.templates.scanner import scan_fragments, unique_token_names
from offer_kit.variables.binder import Completion, Variable, VariableBinder, resolve_value
from offer_kit.variables.categories import Category
from offer_kit.variables.panel import build_variables, filter_variables, group_by_category
from offer_kit.variables.synonyms import SynonymTable
from offer_kit.variables.usage import Usage, UsageIndexer

from .debounce import Debouncer

logger = logging.getLogger(__name__)

EventKind = Literal["loaded", "variables", "rendered", "compliance"]

T = TypeVar("T")


@dataclass(frozen=True)
class LoadedDocument:
    """Everything derived from one successful extraction pass."""

    document: ExtractedDocument
    source: bytes | None  # original PDF bytes; None for plain text
    matches: dict[int, list[TokenMatch]]  # page number -> occurrences
    text: str
    sentences: list[Sentence]

    @property
    def is_pdf(self) -> bool:
        return self.source is not None

    @property
    def token_names(self) -> list[str]:
        return unique_token_names(m for page in self.matches.values() for m in page)


@dataclass(frozen=True)
class LoadResult:
    ok: bool
    variables: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    page_count: int = 0
    error: str | None = None


@dataclass(frozen=True)
class SessionEvent:
    kind: EventKind
    generation: int
    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class RenderState:
    """A committed preview: the values it was built from and its output."""

    generation: int
    values: dict[str, str]
    text: str
    instructions: dict[int, list[Instruction]]


SessionListener = Callable[[SessionEvent], None]


class OfferLetterSession:
    """One offer letter being filled in.

    Owns the variable binder, the rule book and the selected jurisdiction,
    and keeps the derived state (tokens, sentences, flags, usage, preview)
    consistent with them. Synchronous edits commit immediately; debounced
    edits commit only if no newer edit arrived in the meantime.
    """

    def __init__(
        self,
        config: SessionConfig = SessionConfig(),
        *,
        rulebook: RuleBook | None = None,
        synonyms: SynonymTable | None = None,
        measurer: TextMeasurer | None = None,
        sync_client: RuleSyncClient | None = None,
        suggester: EntitySuggester | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config
        self.metrics_hook = metrics_hook
        self.rulebook = rulebook if rulebook is not None else RuleBook.from_defaults()
        self.binder = VariableBinder(synonyms)
        self.classifier = ComplianceClassifier(
            self.rulebook, config.jurisdiction, metrics_hook=metrics_hook
        )
        self.renderer = SubstitutionRenderer(
            measurer or FitzTextMeasurer(),
            erase_mode=config.erase_mode,
            metrics_hook=metrics_hook,
        )
        self.exporter = PdfExporter(scale=config.export_scale, metrics_hook=metrics_hook)
        self.debouncer = Debouncer(config.debounce_ms, metrics_hook=metrics_hook)
        self.sync_client = sync_client
        self.suggester = suggester

        self._pdf_extractor = PdfExtractor(metrics_hook=metrics_hook)
        self._text_extractor = TextExtractor()
        self._usage = UsageIndexer()
        self._document: LoadedDocument | None = None
        self._rendered: RenderState | None = None
        self._last_text_export: bytes = b""
        self._listeners: list[SessionListener] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def document(self) -> LoadedDocument | None:
        return self._document

    @property
    def jurisdiction(self) -> str:
        return self.classifier.jurisdiction

    @property
    def rendered(self) -> RenderState | None:
        return self._rendered

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_pdf(
        self, source: bytes, *, defaults: Mapping[str, str] | None = None
    ) -> LoadResult:
        """Extract a PDF template and make it the current document.

        On failure the previous document stays loaded. Values already bound
        are kept, including names the new template does not use; those
        show zero occurrences and still count towards completion.
        """
        try:
            document = self._pdf_extractor.extract(source)
        except ExtractionError as exc:
            logger.warning("PDF load failed, keeping previous document: %s", exc)
            return LoadResult(ok=False, error=str(exc))
        return self._install(document, bytes(source), defaults)

    def load_text(
        self, text: str, *, defaults: Mapping[str, str] | None = None
    ) -> LoadResult:
        """Make a plain-text template the current document.

        The raw text, blank lines included, is what gets substituted and
        exported. Bound values carry over as with load_pdf.
        """
        try:
            document = self._text_extractor.extract_text(text)
        except ExtractionError as exc:
            logger.warning("Text load failed, keeping previous document: %s", exc)
            return LoadResult(ok=False, error=str(exc))
        return self._install(document, None, defaults, text=text)

    def _install(
        self,
        document: ExtractedDocument,
        source: bytes | None,
        defaults: Mapping[str, str] | None,
        *,
        text: str | None = None,
    ) -> LoadResult:
        matches = {
            page.number: scan_fragments(page.fragments, metrics_hook=self.metrics_hook)
            for page in document.pages
        }
        if text is None:
            text = layout_text(document.pages)
        loaded = LoadedDocument(
            document=document,
            source=source,
            matches=matches,
            text=text,
            sentences=split_sentences(text),
        )

        # tokens and sentences are replaced before anything renders from them
        self._document = loaded
        self.classifier.set_sentences(loaded.sentences)
        self._usage.invalidate()
        names = loaded.token_names
        created = self.binder.seed(names, defaults)

        logger.info(
            "Loaded %s document '%s': %d pages, %d variables (%d new)",
            document.source_type,
            document.title,
            document.page_count,
            len(names),
            len(created),
        )
        self._emit("loaded", tuple(names))
        self._render_now()
        return LoadResult(
            ok=True,
            variables=names,
            created=created,
            page_count=document.page_count,
        )

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def set_variable(self, name: str, value: str) -> None:
        self.binder.set(name, value)
        self._emit("variables", (name,))
        self._render_now()

    async def set_variable_debounced(self, name: str, value: str) -> int:
        """Store the value now and schedule a preview refresh.

        Returns the refresh generation. The refresh works on a snapshot
        taken here, so later edits never leak into it; it is discarded if a
        newer edit or refresh has happened by the time it completes.
        """
        self.binder.set(name, value)
        self._emit("variables", (name,))
        if self._document is None:
            return self.debouncer.cancel()

        document = self._document
        values = self.binder.snapshot()
        flagged = self.flagged_names()

        async def refresh(generation: int) -> None:
            state = await asyncio.to_thread(
                self._build_render_state, generation, document, values, flagged
            )
            self._commit(state)

        return self.debouncer.trigger(refresh)

    async def flush(self) -> None:
        """Wait for any pending debounced refresh."""
        await self.debouncer.wait()

    def clear_variables(self) -> None:
        self.binder.clear_all()
        self._emit("variables", tuple(self.binder.names()))
        self._render_now()

    async def apply_suggestions(
        self, suggestions: Mapping[str, str] | None = None
    ) -> list[str]:
        """Fill unset variables from suggestions; non-blank values are kept.

        Without an explicit mapping the configured suggester is asked, using
        the loaded letter's text. Returns the names that received a value.
        """
        if suggestions is None:
            if self.suggester is None:
                raise ValueError("No entity suggester configured")
            if self._document is None:
                return []
            suggestions = await self.suggester.suggest(
                text=self._document.text, names=self.binder.names()
            )

        usable = {k: v for k, v in suggestions.items() if isinstance(v, str) and v.strip()}
        new = {k: v for k, v in usable.items() if k not in self.binder}
        filled = self.binder.seed([], new)
        for name, value in usable.items():
            if name not in filled and not self.binder.get(name).strip():
                self.binder.set(name, value)
                filled.append(name)

        if filled:
            logger.info("Applied %d suggested values", len(filled))
            self._emit("variables", tuple(filled))
            self._render_now()
        return filled

    def usage(self) -> dict[str, Usage]:
        return self._usage.index(
            self.binder.names(), self.classifier.sentences, self.classifier.flags
        )

    def flagged_names(self) -> frozenset[str]:
        return frozenset(n for n, u in self.usage().items() if u.flagged_occurrences > 0)

    def variable_rows(self, *, search: str = "", flagged_only: bool = False) -> list[Variable]:
        rows = build_variables(self.binder.snapshot(), self.usage())
        return filter_variables(rows, search=search, flagged_only=flagged_only)

    def grouped_rows(
        self, *, search: str = "", flagged_only: bool = False
    ) -> dict[Category, list[Variable]]:
        return group_by_category(self.variable_rows(search=search, flagged_only=flagged_only))

    def completion(self) -> Completion:
        return self.binder.completion()

    # ------------------------------------------------------------------
    # Compliance
    # ------------------------------------------------------------------

    @property
    def flags(self) -> FlagMap:
        return self.classifier.flags

    def compliance_summary(self) -> SeveritySummary:
        return self.classifier.summary()

    async def set_jurisdiction(self, jurisdiction: str) -> SyncResult | None:
        """Switch rule sets; flags and usage are recomputed in full.

        When a sync client is configured the new jurisdiction's phrases are
        pushed to it. A failed sync is reported in the result only.
        """
        self.classifier.set_jurisdiction(jurisdiction)
        logger.info("Jurisdiction set to %s", jurisdiction)
        self._emit("compliance")
        self._render_now()

        if self.sync_client is None:
            return None
        phrases = self.rulebook.phrases_for(jurisdiction)
        return await self.sync_client.sync(jurisdiction, phrases)

    def add_rule(
        self, key: str, definition: Mapping, *, jurisdiction: str | None = None
    ) -> ComplianceRule:
        return self._change_rules(
            lambda code: self.rulebook.add_rule(code, key, definition), jurisdiction
        )

    def add_rules_json(
        self, text: str, *, jurisdiction: str | None = None
    ) -> list[ComplianceRule]:
        return self._change_rules(
            lambda code: self.rulebook.add_rules_json(code, text), jurisdiction
        )

    def add_rule_form(
        self, form: RuleForm, *, jurisdiction: str | None = None
    ) -> ComplianceRule:
        return self._change_rules(
            lambda code: self.rulebook.add_rule_form(code, form), jurisdiction
        )

    def _change_rules(self, change: Callable[[str], T], jurisdiction: str | None) -> T:
        """Apply a rule book change; flags refresh if the active set changed."""
        code = jurisdiction or self.jurisdiction
        try:
            result = change(code)
        except RuleValidationError:
            self.metrics_hook.increment(
                metric_names.RULES_REJECTED_TOTAL, labels={"jurisdiction": code}
            )
            raise
        if code == self.jurisdiction:
            self._emit("compliance")
            self._render_now()
        return result

    def compliance_report(self) -> ComplianceReport:
        title = self._document.document.title if self._document else ""
        return build_report(
            self.classifier.flags,
            jurisdiction=self.jurisdiction,
            template_title=title or "Offer Letter",
        )

    # ------------------------------------------------------------------
    # Rendering and export
    # ------------------------------------------------------------------

    def flat_text(self) -> str:
        if self._document is None:
            return ""
        return substitute_text(self._document.text, self.binder.snapshot())

    async def render_preview(self, page_number: int = 1) -> bytes:
        """PNG of one page (1-based) as of the last committed render."""
        document = self._require_document()
        state = self._rendered
        if state is None:
            state = self._render_now()

        if document.is_pdf:
            return await asyncio.to_thread(
                render_page_png,
                document.source,
                page_number,
                state.instructions.get(page_number, []),
                scale=self.config.preview_scale,
                highlight_flagged=self.config.highlight_flagged,
            )

        def render_text() -> bytes:
            pdf = layout_text_pdf(state.text, title=document.document.title)
            return render_page_png(pdf, page_number, scale=self.config.preview_scale)

        return await asyncio.to_thread(render_text)

    async def export_pdf(self) -> ExportResult:
        """Current values baked into a downloadable PDF.

        PDF templates are exported as rasterized copies and fall back to
        the imported bytes; text templates are laid out afresh and fall back
        to their previous successful export.
        """
        document = self._require_document()
        values = self.binder.snapshot()

        if document.is_pdf:
            flagged = self.flagged_names()

            def instructions() -> dict[int, list[Instruction]]:
                return self._page_instructions(
                    document, values, flagged, erase_mode=self.config.export_erase_mode
                )

            return await asyncio.to_thread(
                self.exporter.export_overlay, document.source, instructions
            )

        result = await asyncio.to_thread(
            self.exporter.export_text,
            substitute_text(document.text, values),
            fallback=self._last_text_export,
            title=document.document.title,
        )
        if result.ok:
            self._last_text_export = result.data
        return result

    def export_filename(self) -> str:
        return offer_letter_filename(self.binder.snapshot())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_document(self) -> LoadedDocument:
        if self._document is None:
            raise RuntimeError("No document loaded")
        return self._document

    def _render_now(self) -> RenderState | None:
        if self._document is None:
            return None
        # a synchronous commit outdates anything still debouncing
        generation = self.debouncer.cancel()
        state = self._build_render_state(
            generation, self._document, self.binder.snapshot(), self.flagged_names()
        )
        self._commit(state)
        return state

    def _build_render_state(
        self,
        generation: int,
        document: LoadedDocument,
        values: dict[str, str],
        flagged: frozenset[str],
    ) -> RenderState:
        instructions = (
            self._page_instructions(
                document, values, flagged, erase_mode=self.config.erase_mode
            )
            if document.is_pdf
            else {}
        )
        return RenderState(
            generation=generation,
            values=values,
            text=substitute_text(document.text, values),
            instructions=instructions,
        )

    def _page_instructions(
        self,
        document: LoadedDocument,
        values: dict[str, str],
        flagged: frozenset[str],
        *,
        erase_mode: EraseMode,
    ) -> dict[int, list[Instruction]]:
        synonyms = self.binder.synonyms

        def resolve(token_name: str) -> str:
            return resolve_value(token_name, values, synonyms)

        result: dict[int, list[Instruction]] = {}
        for page in document.document.pages:
            viewport = Viewport(page.width, page.height, 1.0)
            result[page.number] = self.renderer.positional(
                page.fragments,
                document.matches.get(page.number, []),
                viewport,
                resolve,
                flagged_names=flagged,
                erase_mode=erase_mode,
            )
        return result

    def _commit(self, state: RenderState) -> None:
        if not self.debouncer.is_current(state.generation):
            self.metrics_hook.increment(metric_names.RENDER_SUPERSEDED_TOTAL)
            logger.debug("Discarded superseded render (generation %d)", state.generation)
            return
        self._rendered = state
        self._emit("rendered")

    def _emit(self, kind: EventKind, names: Sequence[str] = ()) -> None:
        event = SessionEvent(
            kind=kind, generation=self.debouncer.generation, names=tuple(names)
        )
        for listener in list(self._listeners):
            listener(event)
