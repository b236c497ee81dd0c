"""
Lexical environments for the Monkey evaluator
A scope is a name -> Object mapping plus a link to its enclosing scope.
"""

from typing import Dict, Iterator, Optional, Tuple

from objects import Object


class Environment:
  """One scope in the chain. Closures share the scope they were defined in."""

  def __init__(self, outer: Optional["Environment"] = None):
    self.store: Dict[str, Object] = {}
    self.outer = outer

  def get(self, name: str) -> Optional[Object]:
    """Look up a name locally, then through each outer scope"""
    env = self
    while env is not None:
      if name in env.store:
        return env.store[name]
      env = env.outer
    return None

  def set(self, name: str, value: Object) -> Object:
    """Bind name in this scope only"""
    self.store[name] = value
    return value

  def bindings(self) -> Iterator[Tuple[str, Object]]:
    """Local bindings, in definition order"""
    return iter(self.store.items())

  def __contains__(self, name: str) -> bool:
    return self.get(name) is not None

  def __repr__(self) -> str:
    return f"Environment({sorted(self.store)}, enclosed={self.outer is not None})"


def new_environment() -> Environment:
  """Create a root environment"""
  return Environment()


def new_enclosed_environment(outer: Environment) -> Environment:
  """Create a child scope whose lookups fall back to outer"""
  return Environment(outer)
