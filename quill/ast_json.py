"""JSON serialization/deserialization for Quill AST.

This module converts between Quill AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node is tagged with
its class name under the "type" key.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    NumericLiteral,
    Identifier,
    Comment,
    Property,
    ObjectLiteral,
    VarDeclaration,
    FnDeclaration,
    AssignmentExpr,
    MemberExpr,
    CallExpr,
    BinaryExpr,
)


def property_to_obj(prop: Property) -> Dict[str, Any]:
    return {"key": prop.key, "value": ast_to_obj(prop.value)}


def property_from_obj(o: Dict[str, Any]) -> Property:
    return Property(key=o["key"], value=ast_from_obj(o.get("value")))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, NumericLiteral):
        return {"type": "NumericLiteral", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "symbol": node.symbol}
    if isinstance(node, Comment):
        return {"type": "Comment", "text": node.text}
    if isinstance(node, ObjectLiteral):
        return {"type": "ObjectLiteral", "properties": [property_to_obj(p) for p in node.properties]}
    if isinstance(node, VarDeclaration):
        return {
            "type": "VarDeclaration",
            "constant": node.constant,
            "identifier": node.identifier,
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, FnDeclaration):
        return {
            "type": "FnDeclaration",
            "name": node.name,
            "parameters": list(node.parameters),
            "body": [ast_to_obj(s) for s in node.body],
            "is_const": node.is_const,
        }
    if isinstance(node, AssignmentExpr):
        return {"type": "AssignmentExpr", "assignee": ast_to_obj(node.assignee), "value": ast_to_obj(node.value)}
    if isinstance(node, MemberExpr):
        return {
            "type": "MemberExpr",
            "object": ast_to_obj(node.object),
            "property": ast_to_obj(node.property),
            "computed": node.computed,
        }
    if isinstance(node, CallExpr):
        return {"type": "CallExpr", "caller": ast_to_obj(node.caller), "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, BinaryExpr):
        return {
            "type": "BinaryExpr",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "NumericLiteral":
        return NumericLiteral(value=str(obj["value"]))
    if t == "Identifier":
        return Identifier(symbol=obj["symbol"])
    if t == "Comment":
        return Comment(text=obj["text"])
    if t == "ObjectLiteral":
        return ObjectLiteral(properties=[property_from_obj(p) for p in obj["properties"]])
    if t == "VarDeclaration":
        return VarDeclaration(
            constant=bool(obj.get("constant", False)),
            identifier=obj["identifier"],
            value=ast_from_obj(obj.get("value")),
        )
    if t == "FnDeclaration":
        return FnDeclaration(
            name=obj["name"],
            parameters=list(obj["parameters"]),
            body=[ast_from_obj(s) for s in obj["body"]],
            is_const=bool(obj.get("is_const", False)),
        )
    if t == "AssignmentExpr":
        return AssignmentExpr(assignee=ast_from_obj(obj["assignee"]), value=ast_from_obj(obj["value"]))
    if t == "MemberExpr":
        return MemberExpr(
            object=ast_from_obj(obj["object"]),
            property=ast_from_obj(obj["property"]),
            computed=bool(obj["computed"]),
        )
    if t == "CallExpr":
        return CallExpr(caller=ast_from_obj(obj["caller"]), args=[ast_from_obj(a) for a in obj["args"]])
    if t == "BinaryExpr":
        return BinaryExpr(
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
            operator=obj["operator"],
        )

    raise ValueError(f"Unknown AST node type: {t}")
