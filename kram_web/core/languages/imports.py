"""
Import rendering for the generated scripting module.

Rendering rules (one ES import statement per specification):

    {from: "a", expose: "*"}                 -> import * from 'a'
    {from: "a", as: "d", expose: "*"}        -> import d, * from 'a'
    {from: "a", as: "d", expose: ["b", "c"]} -> import d, { b, c } from 'a'
    {from: "a", as: "d"}                     -> import d from 'a'
    {from: "a"}                              -> import 'a'
"""

from typing import Any, List, Mapping, Sequence, Union

from ..workbook import ImportSpec


def render_import(spec: Union[ImportSpec, Mapping[str, Any]]) -> str:
    """
    Render one import statement.

    Raises:
        ImportSpecError: If the specification is malformed
    """
    spec = ImportSpec.parse(spec)

    if spec.expose is not None:
        bindings = "*" if spec.is_namespace else "{ " + ", ".join(spec.expose) + " }"
        maybe_default = f"{spec.alias}, " if spec.alias else ""
        return f"import {maybe_default}{bindings} from '{spec.source}'"

    if spec.alias:
        return f"import {spec.alias} from '{spec.source}'"

    return f"import '{spec.source}'"


def render_imports(specs: Sequence[Union[ImportSpec, Mapping[str, Any]]]) -> List[str]:
    """Render every import in the order given; the first malformed one raises."""
    return [render_import(spec) for spec in specs]
