from bigo.extractor import (
    brace_function_name,
    extract,
    extract_spans,
    python_function_name,
    script_function_name,
    text_after_parameters,
)


def _spans(source, language):
    return [(s.name, s.start_line, s.end_line) for s in extract(source, language)]


def test_python_functions_split_on_dedent():
    source = (
        "def a(x):\n"
        "    return x\n"
        "\n"
        "def b(y):\n"
        "    for i in y:\n"
        "        pass\n"
    )
    assert _spans(source, "python") == [("a", 2, 3), ("b", 5, 6)]


def test_python_methods_close_at_outer_code():
    source = (
        "class Foo:\n"
        "    def m(self):\n"
        "        return 1\n"
        "    def n(self):\n"
        "        return 2\n"
        "x = 1\n"
    )
    assert _spans(source, "python") == [("m", 3, 3), ("n", 5, 5)]


def test_scenario_a_span(scenario_a):
    assert _spans(scenario_a, "python") == [("f", 2, 4)]


def test_python_name_extraction():
    assert python_function_name("def solve(self, n):") == "solve"
    assert python_function_name("async def fetch(url):") == "fetch"
    assert python_function_name("def (x):") is None
    assert python_function_name("def broken") is None
    assert python_function_name("def " + "x" * 100 + "():") is None


def test_no_functions_falls_back_to_main():
    extraction = extract_spans("x = 1\ny = 2\nprint(x + y)\n", "python")
    assert not extraction.detected
    assert [(s.name, s.start_line, s.end_line) for s in extraction.spans] == [("main", 1, 3)]


def test_javascript_function_declaration(scenario_b):
    assert _spans(scenario_b, "javascript") == [("bsearch", 2, 6)]


def test_javascript_arrow_assignment():
    source = (
        "const double = (xs) => {\n"
        "  return xs.map(x => x * 2);\n"
        "};\n"
    )
    assert _spans(source, "javascript") == [("double", 2, 3)]


def test_javascript_method_shorthand():
    source = (
        "const obj = {\n"
        "  total: function(items) {\n"
        "    return items.length;\n"
        "  }\n"
        "};\n"
    )
    assert _spans(source, "js") == [("total", 3, 4)]


def test_c_functions_skip_control_flow_and_calls():
    source = (
        "int helper(int a) {\n"
        "    return a + 1;\n"
        "}\n"
        "\n"
        "int main(void) {\n"
        "    if (helper(1) > 0) {\n"
        "        printf(\"ok\\n\");\n"
        "    }\n"
        "    return 0;\n"
        "}\n"
    )
    assert _spans(source, "c") == [("helper", 2, 3), ("main", 6, 10)]


def test_new_opener_closes_open_span():
    source = (
        "void outer() {\n"
        "    int x = 0;\n"
        "void inner() {\n"
        "    x++;\n"
        "}\n"
    )
    assert _spans(source, "cpp") == [("outer", 2, 2), ("inner", 4, 5)]


def test_prototype_yields_empty_span():
    spans = extract("int add(int a, int b);\n", "c")
    assert len(spans) == 1
    assert spans[0].name == "add"
    assert spans[0].start_line > spans[0].end_line


def test_unknown_language_uses_brace_rules():
    source = (
        "func sum(xs []int) int {\n"
        "    total := 0\n"
        "    for _, x := range xs {\n"
        "        total += x\n"
        "    }\n"
        "    return total\n"
        "}\n"
    )
    assert _spans(source, "go") == [("sum", 2, 7)]


def test_brace_name_heuristics():
    assert brace_function_name("public static int search(int[] a, int x) {") == "search"
    assert brace_function_name("pub fn new(x: i32) -> Self {") == "new"
    assert brace_function_name("while (i < n) {") is None
    assert brace_function_name("} catch (Exception e) {") is None
    assert brace_function_name("int mid = (lo + hi) / 2;") is None
    assert brace_function_name("return helper(x);") is None
    assert brace_function_name("foo(x);") is None
    assert brace_function_name("int foo(int x)") is None


def test_script_name_heuristics():
    assert script_function_name("export const load = async (id) => {") == "load"
    assert script_function_name("render: (props) => {") == "render"
    assert script_function_name("if (a === b) {") is None


def test_huge_input_collapses_to_one_span():
    extraction = extract_spans("x = 1\n" * 10_001, "python")
    assert extraction.truncated
    assert [(s.name, s.start_line, s.end_line) for s in extraction.spans] == [("main", 1, 1000)]


def test_rust_loops_without_parentheses_stay_inside_function():
    source = (
        "fn pairs(v: &[i32]) -> usize {\n"
        "    let mut count = 0;\n"
        "    for i in (0..v.len()) {\n"
        "        for j in (0..v.len()) {\n"
        "            count += 1;\n"
        "        }\n"
        "    }\n"
        "    count\n"
        "}\n"
    )
    assert _spans(source, "rust") == [("pairs", 2, 9)]


def test_rust_conditions_and_match_arms_are_not_openers():
    source = (
        "fn check(v: &[i32]) -> bool {\n"
        "    if valid(v) {\n"
        "        return true;\n"
        "    }\n"
        "    match first(v) {\n"
        "        Some(x) => { x > 0 }\n"
        "        None => false,\n"
        "    }\n"
        "}\n"
    )
    assert _spans(source, "rust") == [("check", 2, 9)]


def test_brace_name_rejects_leading_control_keywords():
    assert brace_function_name("for i in (0..n) {") is None
    assert brace_function_name("if valid(v) {") is None
    assert brace_function_name("while let Some(x) = stack.pop() {") is None
    assert brace_function_name("} else if ready(x) {") is None
    assert brace_function_name("match parse(s) {") is None


def test_callback_assignment_inside_function_is_not_an_opener():
    source = (
        "function process(items) {\n"
        "  const positives = items.filter(x => x > 0);\n"
        "  for (let i = 0; i < positives.length; i++) {\n"
        "    for (let j = 0; j < positives.length; j++) {\n"
        "      console.log(positives[i], positives[j]);\n"
        "    }\n"
        "  }\n"
        "}\n"
    )
    assert _spans(source, "javascript") == [("process", 2, 8)]
    assert script_function_name("const positives = items.filter(x => x > 0);") is None
    assert script_function_name("let inc = x => x + 1;") == "inc"
    assert script_function_name("const add = (a: number, b: number): number => a + b;") == "add"


def test_one_line_function_keeps_its_body():
    spans = extract("const double = (arr) => arr.map(x => x * 2);\n", "javascript")
    assert [(s.name, s.start_line, s.end_line) for s in spans] == [("double", 1, 1)]
    assert spans[0].inline_body == "arr.map(x => x * 2);"


def test_one_line_brace_function_body_is_unwrapped():
    spans = extract("int sq(int x) { return x * x; }\n", "c")
    assert spans[0].inline_body == "return x * x;"


def test_text_after_parameters():
    assert text_after_parameters("int f(int a, g(b)) { x; }") == " { x; }"
    assert text_after_parameters("const inc = x => x + 1;") == " x + 1;"
    assert text_after_parameters("broken(a, b") == ""
