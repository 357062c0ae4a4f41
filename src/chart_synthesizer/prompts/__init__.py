from chart_synthesizer.prompts.composer import CHART_PROMPT_TEMPLATE, PromptComposer

__all__ = ["CHART_PROMPT_TEMPLATE", "PromptComposer"]
