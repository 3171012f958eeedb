"""Public model id to upstream model id mapping"""

from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ..models.config import ProxyConfig
from ..utils import logger


DEFAULT_MODEL_MAPPING: Mapping[str, str] = MappingProxyType({
    "gpt-3.5-turbo": "nvidia/llama-3.1-nemotron-ultra-253b-v1",
    "gpt-4": "qwen/qwen3-coder-480b-a35b-instruct",
    "gpt-4-turbo": "moonshotai/kimi-k2-instruct-0905",
    "gpt-4o": "deepseek-ai/deepseek-v3.1",
    "claude-3-opus": "openai/gpt-oss-120b",
    "claude-3-sonnet": "openai/gpt-oss-20b",
    "gemini-pro": "qwen/qwen3-next-80b-a3b-thinking",
    "deepseek-v3.2": "deepseek-ai/deepseek-v3.2",
    "kimi-k2-thinking": "moonshotai/kimi-k2-thinking",
    "deepseek-v3.1-terminus": "deepseek-ai/deepseek-v3.1-terminus",
    "glm4.7": "z-ai/glm4.7",
})

DEFAULT_UPSTREAM_MODEL = "deepseek-ai/deepseek-v3.1"


class ModelTable:
    """Read-only, ordered mapping from public model ids to upstream ids"""

    def __init__(
        self,
        mappings: Optional[Mapping[str, str]] = None,
        default_model: Optional[str] = None,
    ):
        """
        Initialize model table

        Args:
            mappings: Public id -> upstream id, in listing order
                (defaults to the built-in table)
            default_model: Upstream id used for unknown public ids
        """
        if mappings is None:
            mappings = DEFAULT_MODEL_MAPPING
        self._mappings: Mapping[str, str] = MappingProxyType(dict(mappings))
        self._default_model = default_model or DEFAULT_UPSTREAM_MODEL

    @classmethod
    def from_config(cls, config: ProxyConfig) -> "ModelTable":
        """Build the table from configuration overrides, if any"""
        return cls(config.model_mappings, config.default_model)

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def mappings(self) -> Mapping[str, str]:
        return self._mappings

    def resolve(self, public_id: str) -> str:
        """
        Resolve a public model id to its upstream id

        Unknown ids are not an error: the default upstream model is
        returned and the fallback is logged.

        Args:
            public_id: Model id requested by the client

        Returns:
            Upstream model id
        """
        upstream_id = self._mappings.get(public_id)
        if upstream_id is None:
            logger.log_model_fallback(public_id, self._default_model)
            return self._default_model
        return upstream_id

    def public_ids(self) -> List[str]:
        return list(self._mappings)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._mappings.items())

    def __contains__(self, public_id: object) -> bool:
        return public_id in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)
