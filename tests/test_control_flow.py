from flateval.interpreter import Interpreter
from flateval.tokens import ControlKind, OperatorKind, marker, num, op, var

FOR = marker(ControlKind.FOR)
END_FOR = marker(ControlKind.END_FOR)
IF = marker(ControlKind.IF)
ELSE = marker(ControlKind.ELSE)
END_IF = marker(ControlKind.END_IF)
ADD = op(OperatorKind.ADD)
MUL = op(OperatorKind.MULTIPLY)
ASSIGN = op(OperatorKind.ASSIGN)
GT = op(OperatorKind.GREATER_THAN)
LT = op(OperatorKind.LESS_THAN)


def test_for_loop_sums_range():
    interp = Interpreter({'sum': 0})
    result = interp.evaluate([FOR, var('i'), num(1), num(5), var('sum'), ADD, var('i'), END_FOR])
    assert result == 15.0
    assert interp.get_variable('sum') == 15.0
    assert interp.get_variable('i') == 5.0


def test_for_loop_bounds_from_variables():
    interp = Interpreter({'s': 0, 'n': 3})
    interp.evaluate([FOR, var('i'), num(1), var('n'), var('s'), ADD, var('i'), END_FOR])
    assert interp.get_variable('s') == 6.0


def test_for_loop_body_result_goes_to_first_body_variable():
    # Intentional: whatever the body computes is written back to the
    # variable the body starts with, here last * 0 + i
    interp = Interpreter({'last': 0})
    interp.evaluate([FOR, var('i'), num(1), num(3), var('last'), MUL, num(0), ADD, var('i'), END_FOR])
    assert interp.get_variable('last') == 3.0


def test_for_loop_with_no_iterations():
    interp = Interpreter({'sum': 7})
    result = interp.evaluate([FOR, var('i'), num(5), num(1), var('sum'), ADD, var('i'), END_FOR])
    assert result == 0.0
    assert interp.get_variable('sum') == 7.0
    assert 'i' not in interp.variables


def test_for_loop_fractional_start():
    interp = Interpreter({'count': 0})
    interp.evaluate([FOR, var('i'), num(0.5), num(2), var('count'), ADD, num(1), END_FOR])
    assert interp.get_variable('count') == 2.0
    assert interp.get_variable('i') == 1.5


def test_evaluation_continues_after_end_for():
    interp = Interpreter({'s': 0})
    tokens = [FOR, var('i'), num(1), num(3), var('s'), ADD, var('i'), END_FOR, var('s'), MUL, num(2)]
    assert interp.evaluate(tokens) == 12.0


def test_if_without_else():
    interp = Interpreter({'a': 11, 'b': -1})
    assert interp.evaluate([IF, var('a'), GT, num(10), var('b'), ASSIGN, num(1), END_IF]) == 1.0
    assert interp.get_variable('b') == 1.0


def test_if_without_else_condition_false():
    interp = Interpreter({'a': 5, 'b': -1})
    assert interp.evaluate([IF, var('a'), GT, num(10), var('b'), ASSIGN, num(1), END_IF]) == 0.0
    assert interp.get_variable('b') == -1.0


def test_if_else_less_than_is_inclusive():
    tokens = [IF, var('a'), LT, num(10), var('b'), ASSIGN, num(42), ELSE, var('b'), ASSIGN, num(0), END_IF]
    interp = Interpreter({'a': 9, 'b': -1})
    interp.evaluate(tokens)
    assert interp.get_variable('b') == 42.0
    interp = Interpreter({'a': 10, 'b': -1})
    interp.evaluate(tokens)
    assert interp.get_variable('b') == 42.0
    interp = Interpreter({'a': 11, 'b': -1})
    assert interp.evaluate(tokens) == 0.0
    assert interp.get_variable('b') == 0.0


def test_evaluation_continues_after_end_if():
    interp = Interpreter({'a': 11, 'b': -1})
    tokens = [IF, var('a'), GT, num(10), var('b'), ASSIGN, num(1), END_IF, var('b'), ADD, num(1)]
    assert interp.evaluate(tokens) == 2.0


def test_loop_inside_conditional():
    interp = Interpreter({'a': 1, 's': 0})
    tokens = [IF, var('a'), GT, num(0),
              FOR, var('i'), num(1), num(3), var('s'), ADD, var('i'), END_FOR,
              END_IF]
    assert interp.evaluate(tokens) == 6.0
    assert interp.get_variable('s') == 6.0


def test_conditional_inside_loop():
    # A false If without Else yields 0.0, which becomes the body result
    interp = Interpreter({'big': 0})
    tokens = [FOR, var('i'), num(1), num(4),
              var('big'), ADD, num(0),
              IF, var('i'), GT, num(2), var('big'), ADD, num(1), END_IF,
              END_FOR]
    interp.evaluate(tokens)
    assert interp.get_variable('big') == 2.0
