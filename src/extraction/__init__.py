from .models import (
    AdverbialModifier, ClausalComponent, DetailedExtraction, Extraction, Part, SimpleExtraction,
)
from .expanders import expand_argument, expand_relation
from .detectors import adverbial_modifier, clausal_component
from .assembler import from_match
