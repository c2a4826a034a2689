"""
End-to-end tests running complete FinnLang programs.
"""
from finnlang.tests.utils import run_program


def test_counting_while_loop():
    assert run_program("let x = 0; while (x < 3) { woof(x); x = x + 1; }") == ["0", "1", "2"]


def test_if_else():
    assert run_program('if (5 == 5) { woof("yes"); } else { woof("no"); }') == ["yes"]
    assert run_program('if (5 != 5) { woof("yes"); } else { woof("no"); }') == ["no"]


def test_string_concatenation():
    assert run_program('woof("a" + "b");\nwoof("n=" + 5);') == ["ab", "n=5"]


def test_zero_iteration_for_loop():
    assert run_program("for (let i = 0; i < 0; i = i + 1) { woof(i); }\nwoof(\"end\");") == ["end"]


def test_fizzbuzz_from_zero():
    source = (
        "funct fizzbuzz(n: int) {\n"
        "    for (let i = 0; i <= n; i = i + 1) {\n"
        "        if (i % 15 == 0) {\n"
        "            woof(\"FizzBuzz\");\n"
        "        } elif (i % 3 == 0) {\n"
        "            woof(\"Fizz\");\n"
        "        } elif (i % 5 == 0) {\n"
        "            woof(\"Buzz\");\n"
        "        } else {\n"
        "            woof(i);\n"
        "        }\n"
        "    }\n"
        "}\n"
        "fizzbuzz(6);\n"
    )
    assert run_program(source) == ["FizzBuzz", "1", "2", "Fizz", "4", "Buzz", "Fizz"]


def test_bubble_sort():
    source = (
        "/* Sort in place using index assignment. */\n"
        "funct sort(xs: array, n: int): array {\n"
        "    for (let i = 0; i < n; i = i + 1) {\n"
        "        for (let j = 0; j < n - i - 1; j = j + 1) {\n"
        "            if (xs[j] > xs[j + 1]) {\n"
        "                let tmp = xs[j];\n"
        "                xs[j] = xs[j + 1];\n"
        "                xs[j + 1] = tmp;\n"
        "            }\n"
        "        }\n"
        "    }\n"
        "    return xs;\n"
        "}\n"
        "let data: array = [5, 3, 8, 1, 9, 2];\n"
        "woof(sort(data, 6));\n"
        "woof(data);\n"
    )
    assert run_program(source) == ["[1, 2, 3, 5, 8, 9]", "[5, 3, 8, 1, 9, 2]"]


def test_average_of_doubles():
    source = (
        "funct average(xs: array, n: int): double {\n"
        "    let total = 0.0;\n"
        "    let i = 0;\n"
        "    while (i < n) {\n"
        "        total = total + xs[i];\n"
        "        i = i + 1;\n"
        "    }\n"
        "    return total / n;\n"
        "}\n"
        "woof(\"avg: \" + average([1, 2, 4], 3));\n"
    )
    assert run_program(source) == ["avg: 2.3333333333333335"]
