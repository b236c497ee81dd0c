"""
Monkey Interpreter - tree-walking evaluator
Every node evaluates to an Object. Errors are values: each rule checks its
operands for an Error and hands it back untouched, so an error stops the
enclosing expression/statement and bubbles up to the block, call or program.
"""

from typing import Callable, Dict, List, Optional, Sequence, Type

from ast_nodes import (
  BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
  Identifier, IfExpression, InfixExpression, IntegerLiteral, LetStatement, Node,
  PrefixExpression, Program, ReturnStatement, StringLiteral, UnparsedExpression
)
from environment import Environment, new_enclosed_environment, new_environment
from error_handling import MonkeyRuntimeError
from objects import (
  FALSE, NULL, Error, Function, Integer, Object, ReturnValue, String,
  INTEGER_OBJ, STRING_OBJ, native_bool_to_boolean
)
from parsing import create_parser


# ============================================================================
# HELPERS
# ============================================================================

def new_error(message: str) -> Error:
  return Error(message)


def is_error(obj: Optional[Object]) -> bool:
  return isinstance(obj, Error)


def is_truthy(obj: Object) -> bool:
  """NULL and FALSE are falsy, everything else is truthy"""
  return not (obj is NULL or obj is FALSE)


def truncating_div(left: int, right: int) -> int:
  """Integer division rounding toward zero"""
  quotient = abs(left) // abs(right)
  return quotient if (left >= 0) == (right >= 0) else -quotient


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def evaluate(node: Node, env: Environment, debug: bool = False) -> Object:
  """
  Evaluate an AST node in env and return the resulting Object.
  Every node class has exactly one rule in NODE_EVALUATORS.
  """
  if debug:
    print(f"Evaluating: {type(node).__name__}")

  evaluator = NODE_EVALUATORS.get(type(node))
  if evaluator is None:
    raise TypeError(f"no evaluation rule for {type(node).__name__}")
  return evaluator(node, env, debug)


def eval_program(program: Program, env: Environment, debug: bool = False) -> Object:
  """Evaluate top-level statements; a return value is unwrapped here"""
  result: Object = NULL
  for statement in program.statements:
    result = evaluate(statement, env, debug)
    if isinstance(result, ReturnValue):
      return result.value
    if isinstance(result, Error):
      return result
  return result


def eval_block_statement(block: BlockStatement, env: Environment, debug: bool = False) -> Object:
  """Evaluate a block; a return value stays wrapped so enclosing blocks stop too"""
  result: Object = NULL
  for statement in block.statements:
    result = evaluate(statement, env, debug)
    if isinstance(result, (ReturnValue, Error)):
      return result
  return result


def eval_expression_statement(statement: ExpressionStatement, env: Environment, debug: bool = False) -> Object:
  return evaluate(statement.expression, env, debug)


def eval_return_statement(statement: ReturnStatement, env: Environment, debug: bool = False) -> Object:
  value = evaluate(statement.return_value, env, debug)
  if is_error(value):
    return value
  return ReturnValue(value)


def eval_let_statement(statement: LetStatement, env: Environment, debug: bool = False) -> Object:
  value = evaluate(statement.value, env, debug)
  if is_error(value):
    return value
  return env.set(statement.name.value, value)


def eval_identifier(node: Identifier, env: Environment, debug: bool = False) -> Object:
  """Evaluate identifier by looking it up through the scope chain"""
  value = env.get(node.value)
  if value is None:
    return new_error(f"identifier not found: {node.value}")
  return value


def eval_integer_literal(node: IntegerLiteral, env: Environment, debug: bool = False) -> Object:
  return Integer(node.value)


def eval_boolean_literal(node: BooleanLiteral, env: Environment, debug: bool = False) -> Object:
  return native_bool_to_boolean(node.value)


def eval_string_literal(node: StringLiteral, env: Environment, debug: bool = False) -> Object:
  return String(node.value)


def eval_unparsed_expression(node: UnparsedExpression, env: Environment, debug: bool = False) -> Object:
  return new_error("cannot evaluate unparsed expression")


# ==================== PREFIX OPERATORS ====================

def eval_prefix_expression(node: PrefixExpression, env: Environment, debug: bool = False) -> Object:
  right = evaluate(node.right, env, debug)
  if is_error(right):
    return right

  if node.operator == "!":
    return eval_bang_operator(right)
  if node.operator == "-":
    return eval_minus_prefix_operator(right)
  return new_error(f"unknown operator: {node.operator}{right.type()}")


def eval_bang_operator(right: Object) -> Object:
  return native_bool_to_boolean(not is_truthy(right))


def eval_minus_prefix_operator(right: Object) -> Object:
  if not isinstance(right, Integer):
    return new_error(f"unknown operator: -{right.type()}")
  return Integer(-right.value)


# ==================== INFIX OPERATORS ====================

def eval_infix_expression(node: InfixExpression, env: Environment, debug: bool = False) -> Object:
  left = evaluate(node.left, env, debug)
  if is_error(left):
    return left
  right = evaluate(node.right, env, debug)
  if is_error(right):
    return right
  return apply_infix_operator(node.operator, left, right)


def apply_infix_operator(operator: str, left: Object, right: Object) -> Object:
  if left.type() == INTEGER_OBJ and right.type() == INTEGER_OBJ:
    return eval_integer_infix(operator, left, right)
  if left.type() == STRING_OBJ and right.type() == STRING_OBJ:
    return eval_string_infix(operator, left, right)
  if operator == "==":
    return native_bool_to_boolean(left == right)
  if operator == "!=":
    return native_bool_to_boolean(left != right)
  if left.type() != right.type():
    return new_error(f"type mismatch: {left.type()} {operator} {right.type()}")
  return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")


def eval_integer_infix(operator: str, left: Integer, right: Integer) -> Object:
  a, b = left.value, right.value

  if operator == "+":
    return Integer(a + b)
  if operator == "-":
    return Integer(a - b)
  if operator == "*":
    return Integer(a * b)
  if operator == "/":
    if b == 0:
      return new_error("division by zero")
    return Integer(truncating_div(a, b))
  if operator == "<":
    return native_bool_to_boolean(a < b)
  if operator == ">":
    return native_bool_to_boolean(a > b)
  if operator == "==":
    return native_bool_to_boolean(a == b)
  if operator == "!=":
    return native_bool_to_boolean(a != b)
  return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")


def eval_string_infix(operator: str, left: String, right: String) -> Object:
  if operator == "+":
    return String(left.value + right.value)
  if operator == "==":
    return native_bool_to_boolean(left.value == right.value)
  if operator == "!=":
    return native_bool_to_boolean(left.value != right.value)
  return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")


# ==================== CONTROL FLOW ====================

def eval_if_expression(node: IfExpression, env: Environment, debug: bool = False) -> Object:
  condition = evaluate(node.condition, env, debug)
  if is_error(condition):
    return condition

  if is_truthy(condition):
    return evaluate(node.consequence, env, debug)
  if node.alternative is not None:
    return evaluate(node.alternative, env, debug)
  return NULL


# ==================== FUNCTIONS ====================

def eval_function_literal(node: FunctionLiteral, env: Environment, debug: bool = False) -> Object:
  """Capture the defining scope; the body is not evaluated until a call"""
  return Function(node.parameters, node.body, env)


def eval_call_expression(node: CallExpression, env: Environment, debug: bool = False) -> Object:
  function = evaluate(node.function, env, debug)
  if is_error(function):
    return function
  if not isinstance(function, Function):
    return new_error(f"not a function: {function.type()}")

  args = eval_expressions(node.arguments, env, debug)
  if len(args) == 1 and is_error(args[0]):
    return args[0]

  return apply_function(function, args, debug)


def eval_expressions(expressions: Sequence[Node], env: Environment, debug: bool = False) -> List[Object]:
  """Evaluate left to right; on the first Error return just that error"""
  results = []
  for expression in expressions:
    value = evaluate(expression, env, debug)
    if is_error(value):
      return [value]
    results.append(value)
  return results


def apply_function(function: Function, args: List[Object], debug: bool = False) -> Object:
  if len(args) != len(function.parameters):
    return new_error(
      f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}")

  if debug:
    print(f"  Calling {function.inspect()} with {[arg.inspect() for arg in args]}")

  call_env = extend_function_env(function, args)
  result = evaluate(function.body, call_env, debug)
  return unwrap_return_value(result)


def extend_function_env(function: Function, args: List[Object]) -> Environment:
  """New scope enclosed by the captured environment, never the caller's"""
  env = new_enclosed_environment(function.env)
  for param, arg in zip(function.parameters, args):
    env.set(param.value, arg)
  return env


def unwrap_return_value(obj: Object) -> Object:
  if isinstance(obj, ReturnValue):
    return obj.value
  return obj


NODE_EVALUATORS: Dict[Type[Node], Callable[[Node, Environment, bool], Object]] = {
  Program: eval_program,
  BlockStatement: eval_block_statement,
  ExpressionStatement: eval_expression_statement,
  ReturnStatement: eval_return_statement,
  LetStatement: eval_let_statement,
  Identifier: eval_identifier,
  IntegerLiteral: eval_integer_literal,
  BooleanLiteral: eval_boolean_literal,
  StringLiteral: eval_string_literal,
  PrefixExpression: eval_prefix_expression,
  InfixExpression: eval_infix_expression,
  IfExpression: eval_if_expression,
  FunctionLiteral: eval_function_literal,
  CallExpression: eval_call_expression,
  UnparsedExpression: eval_unparsed_expression,
}


# ============================================================================
# INTERPRETER SESSION
# ============================================================================

class Interpreter:
  """Evaluates programs against one persistent root environment"""

  def __init__(self, debug: bool = False, environment: Optional[Environment] = None):
    self.debug = debug
    self.environment = environment if environment is not None else new_environment()
    self.parser = create_parser(debug)

  def evaluate(self, program: Program) -> Object:
    return evaluate(program, self.environment, self.debug)

  def run(self, source: str, filename: Optional[str] = None) -> Object:
    """Parse and evaluate source; syntax and evaluation errors are raised"""
    program = self.parser.parse_string(source, filename)
    return self._checked(self.evaluate(program), filename)

  def run_file(self, path: str) -> Object:
    program = self.parser.parse_file(path)
    return self._checked(self.evaluate(program), path)

  @staticmethod
  def _checked(result: Object, filename: Optional[str]) -> Object:
    if isinstance(result, Error):
      raise MonkeyRuntimeError(result.message, filename)
    return result


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False) -> Interpreter:
  """Factory function returning an interpreter"""
  return Interpreter(debug=debug)


def create_debug_interpreter() -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True)
