import pytest

from jam import errors
from jam.evaluation.evaluator import Evaluator, evaluate
from jam.evaluation.policy import get_policy
from jam.interpreter import Interpreter
from jam.reader.parser import parse
from jam.types.ast_nodes import App, BinOpApp, IntConstant, Let, Map
from jam.types.values import Closure, EMPTY, FALSE, TRUE, from_python_list
from jam.types.variable import Variable

# -----------------------------------------------------
# Every test here runs once per evaluation mode (see conftest.py)
# -----------------------------------------------------


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", 42),
        ("true", TRUE),
        ("false", FALSE),
        ("null", EMPTY),
        ("1 + 2 * 3", 7),
        ("(1 + 2) * 3", 9),
        ("10 - 3 - 2", 5),
        ("-5 + 2", -3),
        ("+7", 7),
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("~true", FALSE),
        ("1 < 2", TRUE),
        ("2 <= 1", FALSE),
        ("3 > 2 & 2 >= 2", TRUE),
        ("1 = 1", TRUE),
        ("1 != 1", FALSE),
        ("true = true", TRUE),
        ("null = null", TRUE),
        ("1 = true", FALSE),
        ("cons(1, cons(2, null)) = cons(1, cons(2, null))", TRUE),
        ("if 1 < 2 then 10 else 20", 10),
        ("if 1 > 2 then 10 else 20", 20),
        ("first(cons(1, null))", 1),
        ("rest(cons(1, null))", EMPTY),
        ("cons(1, cons(2, null))", from_python_list([1, 2])),
        ("-if true then 1 else 2", -1),
        ("~let b := true; in b", FALSE),
        ("2 * -if false then 1 else 3", -6),
    ]
)
def test_simple_expressions(run, source, expected):
    assert run(source) == expected


def test_let_scenario(run):
    assert run("let x := 5; y := x + 1; in y * 2") == 12


def test_higher_order_application_scenario(run):
    assert run("(map f to f(3))(map n to n * n)") == 9


def test_map_evaluates_to_closure_capturing_environment(mode):
    prog = parse("let k := 3; in map z to z + k")
    evaluator = Evaluator(get_policy(mode))
    closure = evaluator.evaluate(prog)
    assert isinstance(closure, Closure)
    assert closure.params == (Variable("z"),)
    assert Variable("k") in closure.env


def test_later_definition_sees_earlier_one(run):
    assert run("let a := 1; b := a + 1; c := b * a + b; in c") == 4


@pytest.mark.parametrize(
    "mode,error",
    [
        ("value", errors.JamUnboundVariable),
        ("name", RecursionError),
        ("need", errors.JamSelfReferenceError),
    ],
)
def test_self_defining_let_fails_by_mode(mode, error):
    with pytest.raises(error):
        Interpreter.from_source("let x := x; in x").run(mode)


def test_let_binding_sees_sibling_before_outer_scope(run):
    # the inner y refers to the sibling x = 10, which shadows the outer x = 1
    assert run("let x := 1; in let x := 10; y := x; in y") == 10


def test_non_recursive_let_sees_outer_scope(mode):
    source = "let x := 1; in let x := 10; y := x; in y"
    assert evaluate(parse(source), get_policy(mode), recursive_let=False) == 1
    with pytest.raises(errors.JamUnboundVariable):
        evaluate(parse("let x := 5; y := x + 1; in y"), get_policy(mode), recursive_let=False)


def test_shadowing_in_nested_let(run):
    assert run("let x := 1; in let x := 2; in x") == 2


def test_lexical_scoping(run):
    # `add` captures x = 1; the caller's x = 100 must not leak in
    source = """
        let x := 1;
        in let add := map y to x + y;
           in let x := 100; in add(x)
    """
    assert run(source) == 101


def test_closure_parameter_shadows_captured_variable(run):
    assert run("let x := 1; f := map x to x * 10; in f(7)") == 70


def test_curried_closures_share_captured_frame(run):
    source = """
        let adder := map a to map b to a + b;
        in let add5 := adder(5); in add5(1) + add5(2)
    """
    assert run(source) == 13


def test_zero_argument_closure(run):
    assert run("(map to 42)()") == 42


def test_unbound_variable(run):
    with pytest.raises(errors.JamUnboundVariable):
        run("x + 1")


def test_closure_arity_mismatch(run):
    with pytest.raises(errors.JamArityError):
        run("(map x, y to x)(1)")
    with pytest.raises(errors.JamArityError):
        run("(map x to x)(1, 2)")


def test_applying_non_function(run):
    with pytest.raises(errors.JamTypeError):
        run("5(1)")


def test_if_requires_boolean_test(run):
    with pytest.raises(errors.JamTypeError):
        run("if 1 then 2 else 3")


def test_untaken_branch_never_evaluated(run):
    assert run("if true then 1 else 1 / 0") == 1
    assert run("if false then first(null) else 2") == 2


def test_boolean_connectives_short_circuit(run):
    assert run("false & (1 / 0 = 1)") is FALSE
    assert run("true | first(null)") is TRUE


def test_boolean_connectives_require_booleans(run):
    with pytest.raises(errors.JamTypeError):
        run("1 & true")
    with pytest.raises(errors.JamTypeError):
        run("true & 1")


def test_binary_operands_are_eager(run):
    # operands of ordinary binary operators are forced regardless of mode
    with pytest.raises(errors.JamArithmeticError):
        run("(1 / 0) * 0")


def test_operand_evaluation_is_left_to_right(run):
    with pytest.raises(errors.JamTypeError):
        run("first(null) + (1 / 0)")
    with pytest.raises(errors.JamArithmeticError):
        run("(1 / 0) + first(null)")


def test_primitive_arguments_are_eager(run):
    with pytest.raises(errors.JamArithmeticError):
        run("number?(1 / 0)")


def test_primitive_values_are_first_class(run):
    assert run("(map f to f(1, null))(cons)") == from_python_list([1])
    assert run("arity(cons) + arity(map a, b, c to a)") == 5
    assert run("function?(first)") is TRUE


def test_recursion_through_self_application(run):
    # recursion by passing the function to itself, without let self-reference
    source = """
        let fact := map self, n to if n = 0 then 1 else n * self(self, n - 1);
        in fact(fact, 6)
    """
    assert run(source) == 720


def test_list_building_program(run):
    source = """
        let build := map self, n to if n = 0 then null else cons(n, self(self, n - 1));
            sum := map self, l to if null?(l) then 0 else first(l) + self(self, rest(l));
        in sum(sum, build(build, 10))
    """
    assert run(source) == 55


def test_evaluate_hand_built_ast(mode):
    x, y = Variable("x"), Variable("y")
    prog = Let((x, y), (IntConstant(5), BinOpApp("+", x, IntConstant(1))), BinOpApp("*", y, IntConstant(2)))
    policy = get_policy(mode)
    assert evaluate(prog, policy) == 12

    f, n = Variable("f"), Variable("n")
    app = App(Map((f,), App(f, (IntConstant(3),))), (Map((n,), BinOpApp("*", n, n)),))
    assert evaluate(app, policy) == 9


def test_same_program_evaluates_identically_twice(mode):
    interp = Interpreter.from_source("let p := cons(1, null); in let f := map x to cons(x, p); in f(2)")
    first_result = interp.run(mode)
    second_result = interp.run(mode)
    assert first_result == second_result == from_python_list([2, 1])


@pytest.mark.parametrize("mode", ["value", "need"])
def test_deep_list_building_fits_default_recursion_limit(mode):
    source = """
        let build := map self, n to if n = 0 then null else cons(n, self(self, n - 1));
        in build(build, 120)
    """
    result = Interpreter.from_source(source).run(mode)
    assert result.first == 120
    assert len(list(result)) == 120
