"""Prompt synthesis modules for DashGen."""

from dashgen.inference.prompt_synthesizer import PromptSynthesizer, SynthesizedPrompt
from dashgen.inference.prompts import PromptTemplates

__all__ = ["PromptSynthesizer", "SynthesizedPrompt", "PromptTemplates"]
