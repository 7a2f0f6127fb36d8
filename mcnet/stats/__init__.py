"""
Null models and significance of the motif clustering coefficient.
"""

from .null_models import DEFAULT_MAX_TRIALS, SynthesisResult, place_motifs, synthesize
from .sampling import SampleStatResult, null_moments, sample, sample_null_coefficients, z_score

__all__ = [
    "DEFAULT_MAX_TRIALS",
    "SynthesisResult",
    "place_motifs",
    "synthesize",
    "SampleStatResult",
    "null_moments",
    "sample",
    "sample_null_coefficients",
    "z_score",
]
