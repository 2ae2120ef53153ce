#!/usr/bin/env python3
"""
Demo: Convert an in-memory FreeType-style binding.

Shows the two outputs of a conversion:
1. The rewritten binding source
2. The loader code for the dynamic build
"""

from dynamizer.config import DynamizerConfig
from dynamizer.patterns import compile_matcher
from dynamizer.transform import transform_text
from dynamizer.backends import render_loader_code


SOURCE = """module bindbc.freetype.bind.freetype;

/* FT_Init_FreeType (FT_Library* alibrary); stays a comment */
extern(C) @nogc nothrow:

FT_Error FT_Init_FreeType (FT_Library* alibrary);
FT_Error FT_Done_FreeType (FT_Library library);
FT_Error FT_New_Face (FT_Library library,
    const(char)* filepathname,
    FT_Long face_index,
    FT_Face* aface);
"""


def main():
    config = DynamizerConfig(search_prefix="FT_", static_version_string="BindFT_Static")
    matcher = compile_matcher(config)
    result = transform_text(SOURCE, config, matcher)

    print("=" * 80)
    print("CONVERTED BINDING")
    print("=" * 80)
    print(result.text)

    print("=" * 80)
    print(f"LOADER CODE ({result.function_count} functions, {result.module_count} module)")
    print("=" * 80)
    print(render_loader_code(result.loader_entries))


if __name__ == "__main__":
    main()
