from .layout import aligned_length, pad_json
from .planner import ConsolidationPlan, Segment, consolidate
from .writer import assemble_glb, write_glb
from .inspector import inspect_glb, validate_glb

__all__ = [
    "aligned_length",
    "pad_json",
    "ConsolidationPlan",
    "Segment",
    "consolidate",
    "assemble_glb",
    "write_glb",
    "inspect_glb",
    "validate_glb",
]
