"""
Monkey runtime values
Closed set of immutable objects produced by evaluation
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ast_nodes import BlockStatement, Identifier

if TYPE_CHECKING:
  from environment import Environment


INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
STRING_OBJ = "STRING"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"


class Object:
  """Base of every runtime value"""

  def type(self) -> str:
    raise NotImplementedError

  def inspect(self) -> str:
    raise NotImplementedError

  def __str__(self) -> str:
    return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
  value: int

  def type(self) -> str:
    return INTEGER_OBJ

  def inspect(self) -> str:
    return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
  value: bool

  def type(self) -> str:
    return BOOLEAN_OBJ

  def inspect(self) -> str:
    return "true" if self.value else "false"


class Null(Object):
  """Absence of a value; use the NULL singleton"""

  def type(self) -> str:
    return NULL_OBJ

  def inspect(self) -> str:
    return "null"

  def __repr__(self) -> str:
    return "NULL"


@dataclass(frozen=True)
class String(Object):
  value: str

  def type(self) -> str:
    return STRING_OBJ

  def inspect(self) -> str:
    return self.value


@dataclass(frozen=True)
class ReturnValue(Object):
  """Marks a value produced by `return` until a call or the program unwraps it"""
  value: Object

  def type(self) -> str:
    return RETURN_VALUE_OBJ

  def inspect(self) -> str:
    return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
  message: str

  def type(self) -> str:
    return ERROR_OBJ

  def inspect(self) -> str:
    return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False)
class Function(Object):
  """Closure: parameters and body plus the environment of the definition site"""
  parameters: Tuple[Identifier, ...]
  body: BlockStatement
  env: "Environment"

  def type(self) -> str:
    return FUNCTION_OBJ

  def inspect(self) -> str:
    params = ", ".join(str(param) for param in self.parameters)
    return f"fn({params}) {self.body}"

  def __repr__(self) -> str:
    return f"Function({self.inspect()})"


# Canonical singletons
TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
  return TRUE if value else FALSE
