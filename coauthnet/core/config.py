"""
configuration for coauthnet.
all settings in one place, easily tunable.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GraphConfig:
    """graph construction settings."""
    # node radius range
    min_radius: float = 2.0
    max_radius: float = 8.0

    # group for authors without an affiliation
    unknown_group: str = "Unknown"


@dataclass
class RenderConfig:
    """settings passed straight through to the force-graph renderer."""
    # node styling
    highlight_color: str = "#B7410E"
    default_color: str = "#66a5ed"
    node_rel_size: int = 4
    label_font: str = "Sedan SC"
    label_base_size: float = 12.0
    label_color: str = "black"

    # link styling
    link_color: str = "#607d8b"
    link_curvature: float = 0.1
    link_width: float = 1.2
    link_hover_precision: int = 5
    background_color: str = "transparent"

    # simulation
    alpha_decay: float = 0.01
    velocity_decay: float = 0.3
    warmup_ticks: int = 50
    cooldown_ticks: int = 300

    # interaction
    enable_zoom: bool = True
    enable_drag: bool = True
    enable_pan: bool = True

    # page
    height: str = "70vh"
    min_height: str = "550px"
    script_url: str = "https://unpkg.com/force-graph"
    empty_message: str = "None"


@dataclass
class ExportConfig:
    """export settings."""
    output_dir: str = "output"
    default_format: str = "html"
    json_indent: Optional[int] = 2


@dataclass
class CoauthnetConfig:
    """master configuration for coauthnet."""
    graph: GraphConfig = field(default_factory=GraphConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    @classmethod
    def default(cls) -> 'CoauthnetConfig':
        """return default configuration."""
        return cls()

    @classmethod
    def embedded(cls) -> 'CoauthnetConfig':
        """compact page for embedding next to other content."""
        config = cls()
        config.render.height = "400px"
        config.render.min_height = "0"
        return config
