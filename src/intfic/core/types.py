"""Shared type aliases for the core and domain layers."""
from typing import Literal

ColorName = Literal["white", "yellow", "blue", "green", "red", "purple", "cyan"]
ComparisonOp = Literal["<", "<=", "==", ">=", ">"]
ControlCommand = Literal["quit", "save", "load"]
TextDisplayMode = Literal["instant", "typewriter"]

__all__ = ["ColorName", "ComparisonOp", "ControlCommand", "TextDisplayMode"]
