"""Path parameter converters for route segments like ``{id:int}``.

Parameters stay strings in ``request.path_params``; the converter only
decides which segments match.
"""

# regex pattern per supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}
