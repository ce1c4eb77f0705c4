"""Core business logic components."""

from .prompt_builder import PromptSet, build_prompts
from .response_interpreter import classify_response, interpret_response
from .assembler import assemble_outcome
from .orchestrator import GenerationOrchestrator
from .delivery import DeliveryService

__all__ = [
    "PromptSet",
    "build_prompts",
    "classify_response",
    "interpret_response",
    "assemble_outcome",
    "GenerationOrchestrator",
    "DeliveryService",
]
