"""全局变量声明登记表。"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .model import DeclIdentity, FunctionRef, SourceLocation, VariableDeclaration


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GlobalVariable:
    identity: DeclIdentity
    name: str
    location: SourceLocation
    referencing_functions: Set[FunctionRef] = field(default_factory=set)

    def add_reference(self, function: FunctionRef) -> None:
        self.referencing_functions.add(function)


class GlobalRegistry:
    def __init__(self) -> None:
        self._variables: Dict[DeclIdentity, GlobalVariable] = {}

    def track(self, identity: DeclIdentity, name: str, location: SourceLocation) -> GlobalVariable:
        """登记一个全局变量；已存在时保持原有引用集合不变。"""

        existing = self._variables.get(identity)
        if existing is not None:
            return existing
        variable = GlobalVariable(identity, name, location)
        self._variables[identity] = variable
        return variable

    def consider(self, declaration: VariableDeclaration) -> Optional[GlobalVariable]:
        if declaration.in_header:
            logger.debug("头文件中的变量 %s 不参与分析", declaration.name)
            return None
        if not declaration.has_global_storage:
            return None
        return self.track(declaration.identity, declaration.name, declaration.location)

    def get(self, identity: DeclIdentity) -> Optional[GlobalVariable]:
        return self._variables.get(identity)

    def all(self) -> List[GlobalVariable]:
        return list(self._variables.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._variables

    def __len__(self) -> int:
        return len(self._variables)


__all__ = ["GlobalRegistry", "GlobalVariable"]
