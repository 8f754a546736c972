from tripgraph.llm.client import LLMClient
from tripgraph.llm.loader import PromptTemplate, load_prompt

__all__ = [
    "LLMClient",
    "PromptTemplate",
    "load_prompt",
]
