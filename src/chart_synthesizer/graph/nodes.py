"""
LangGraph Nodes for the synthesis workflow.

Each node performs one step and returns the state keys it produces. Nodes
raise the typed errors from ``chart_synthesizer.core.exceptions``; they are
not converted into status values, so ``ainvoke`` surfaces them unchanged.

Workflow:
    START -> route_request
        -> compose_prompt -> generate_completion -> parse_output
        -> build_index -> retrieve_answer -> parse_output
        -> reject_document (raises)
    parse_output -> render_chart -> build_snippet -> END
"""

from typing import Any, Dict

from chart_synthesizer.core.exceptions import UnsupportedFormatError
from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.graph.state import SynthesisState
from chart_synthesizer.retrieval.loaders import is_supported
from chart_synthesizer.retrieval.memory import ConversationMemory
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)


class SynthesisNodes:
    """
    Workflow nodes bound to one SynthesisDependencies bundle.

    Example:
        >>> nodes = SynthesisNodes(deps)
        >>> workflow.add_node("compose_prompt", nodes.compose_prompt)
    """

    def __init__(self, dependencies: SynthesisDependencies):
        self.deps = dependencies

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route_request(self, state: SynthesisState) -> str:
        """
        Pick the entry node for a request.

        Returns:
            "compose_prompt" without a document, "build_index" for a document
            with a registered loader, "reject_document" otherwise
        """
        document = state.get("document")
        if document is None:
            logger.debug("[route_request] No document - direct generation path")
            return "compose_prompt"
        if is_supported(document.media_type, self.deps.loaders):
            logger.debug(f"[route_request] Document '{document.media_type}' - retrieval path")
            return "build_index"
        return "reject_document"

    def reject_document(self, state: SynthesisState) -> Dict[str, Any]:
        media_type = state["document"].media_type
        logger.warning(f"[reject_document] Unsupported media type: '{media_type}'")
        raise UnsupportedFormatError(
            f"Unsupported file format '{media_type}'. "
            f"Supported: {', '.join(sorted(self.deps.loaders))}",
            media_type=media_type,
        )

    # ------------------------------------------------------------------
    # No-document path
    # ------------------------------------------------------------------

    def compose_prompt(self, state: SynthesisState) -> Dict[str, Any]:
        prompt = self.deps.composer.compose(state["question"])
        return {"prompt": prompt, "status": "prompt_composed"}

    async def generate_completion(self, state: SynthesisState) -> Dict[str, Any]:
        raw_output = await self.deps.chat_client.complete(state["prompt"])
        logger.info(f"[generate_completion] Received {len(raw_output)} chars")
        return {"raw_output": raw_output, "status": "generated"}

    # ------------------------------------------------------------------
    # Document path
    # ------------------------------------------------------------------

    async def build_index(self, state: SynthesisState) -> Dict[str, Any]:
        index = await self.deps.index_builder().build(state["document"])
        return {"index": index, "status": "indexed"}

    async def retrieve_answer(self, state: SynthesisState) -> Dict[str, Any]:
        # Memory is scoped to this invocation
        raw_output = await self.deps.retrieval_engine().answer(
            state["question"], state["index"], ConversationMemory()
        )
        return {"raw_output": raw_output, "status": "generated"}

    # ------------------------------------------------------------------
    # Shared tail
    # ------------------------------------------------------------------

    def parse_output(self, state: SynthesisState) -> Dict[str, Any]:
        chart_spec = self.deps.parser.parse(state.get("raw_output"))
        logger.info(
            f"[parse_output] Valid {chart_spec.chartType} spec with "
            f"{len(chart_spec.data.datasets)} dataset(s)"
        )
        return {
            "chart_spec": chart_spec,
            "chart_config": chart_spec.to_chart_config(),
            "status": "parsed",
        }

    async def render_chart(self, state: SynthesisState) -> Dict[str, Any]:
        image_data_url = await self.deps.renderer.render(state["chart_spec"])
        return {"image_data_url": image_data_url, "status": "rendered"}

    def build_snippet(self, state: SynthesisState) -> Dict[str, Any]:
        spec = state["chart_spec"]
        html = self.deps.snippet_generator.generate(
            state["chart_config"], spec.backgroundColour, spec.height, spec.width
        )
        return {"embeddable_html": html, "status": "success"}
