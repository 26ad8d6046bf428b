from __future__ import annotations

from collections.abc import Mapping, Sequence
from os import PathLike

type Scalar = str | int | float | PathLike[str]
type ArgValue = None | bool | Scalar | Sequence[Scalar] | Mapping[str, Scalar]
type ArgConfig = Mapping[str, ArgValue]
