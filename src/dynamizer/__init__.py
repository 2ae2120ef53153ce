"""
Binding Dynamizer

Converts D language static bindings into BindBC compatible dynamic ones.

PIPELINE:
---------
    DynamizerConfig  ->  compile_matcher()  ->  Matcher
    Matcher + source ->  transform_text()   ->  TransformResult

The core (patterns + transform) works on in-memory text only.
It contains ZERO knowledge of:
    - files and folders
    - command line options
    - where the loader code ends up

Those concerns live in the converter, backends and CLI layers.
"""

__version__ = "0.1.0"
