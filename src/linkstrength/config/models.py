"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linkstrength.toml only contains
overrides.  A workspace needs nothing but a [graph] section.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from linkstrength.domain.walks import MAX_WALK_LENGTH

# --- linkstrength.toml sections ---


class GraphConfig(BaseModel):
    """[graph] section — where the hyperlink graph comes from."""

    model_config = {"frozen": True}

    nodes: list[str] = Field(default_factory=list)
    edges: list[tuple[str, str]] = Field(default_factory=list)
    edge_files: list[str] = Field(default_factory=list)


class PredictConfig(BaseModel):
    """[predict] section.

    ``max_length`` and ``threshold`` left unset mean "node count" and
    ``alpha + beta`` respectively.
    """

    model_config = {"frozen": True}

    alpha: float = 0.1
    beta: float = 0.5
    max_length: int | None = Field(default=None, ge=0, le=MAX_WALK_LENGTH)
    threshold: float | None = None
    workers: int = Field(default=1, ge=1)


class WalksConfig(BaseModel):
    """[walks] section."""

    model_config = {"frozen": True}

    limit: int = Field(default=50, ge=1)


class LinkConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    graph: GraphConfig = Field(default_factory=GraphConfig)
    predict: PredictConfig = Field(default_factory=PredictConfig)
    walks: WalksConfig = Field(default_factory=WalksConfig)
