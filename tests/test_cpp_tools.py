import pytest

from portfolio.cpp_tools import (
    analyze_cpp_code,
    format_cpp_code,
    lint_cpp_code,
    lint_summary,
    run_cpp_action,
)

FIB = """int fib(int n) {
    if (n <= 1) return n;
    return fib(n - 1) + fib(n - 2);
}
"""

NESTED = """#include <vector>
void fill(std::vector<int>& v, int n) {
    for (int i = 0; i < n; i++) {
        for (int j = 0; j < n; j++) {
            v.push_back(i * j);
        }
    }
}
"""


def test_format_spacing():
    formatted, changes = format_cpp_code("if(x>0){return x;}")
    assert formatted == "if (x > 0) {return x;}\n"
    assert changes == 1


def test_format_else_and_comparison():
    formatted, _ = format_cpp_code("if (a==b) {\n}\nelse {\n}")
    assert "a == b" in formatted
    assert "} else {" in formatted


def test_format_strips_trailing_whitespace():
    formatted, changes = format_cpp_code("int a;   \nint b;\t")
    assert formatted == "int a;\nint b;\n"
    assert changes == 0


def test_lint_using_namespace_std():
    diagnostics = lint_cpp_code("#include <iostream>\n  using namespace std;\n")
    assert diagnostics == [{
        "line": 2,
        "column": 3,
        "severity": "warning",
        "message": "Avoid 'using namespace std' - prefer explicit std:: prefix",
        "code": "W001",
    }]


def test_lint_rules():
    code = "\n".join([
        "int* p = new int(5);",
        "double d = (double) x;",
        "int arr[100];",
        "// TODO: fix this",
        "// " + "a" * 130,
    ])
    by_code = {d["code"]: d for d in lint_cpp_code(code)}

    assert by_code["W002"]["line"] == 1
    assert by_code["W002"]["column"] == 10
    assert by_code["I001"]["line"] == 2
    assert by_code["H001"]["line"] == 3
    assert by_code["I003"]["column"] == 4
    assert by_code["I002"]["column"] == 121
    assert by_code["I002"]["line"] == 5


def test_lint_clean_code():
    assert lint_cpp_code("int main() {\n    return 0;\n}\n") == []


def test_lint_summary():
    diagnostics = lint_cpp_code("using namespace std;\nint arr[100];\n// FIXME\n")
    assert lint_summary(diagnostics) == {"errors": 0, "warnings": 1, "info": 1, "hints": 1}


def test_analyze_recursion():
    analysis = analyze_cpp_code(FIB)
    assert analysis["complexity"]["cyclomatic"] == 2
    assert analysis["complexity"]["cognitive"] == 5
    assert analysis["complexity"]["functions"] == 1
    assert analysis["complexity"]["linesOfCode"] == 4
    assert analysis["performance"]["estimatedComplexity"] == "O(2^n) - consider memoization"
    assert "Consider tail recursion optimization or iterative approach" in analysis["performance"]["suggestions"]


def test_analyze_nested_loops():
    analysis = analyze_cpp_code(NESTED)
    assert analysis["performance"]["estimatedComplexity"] == "O(n²)"
    assert analysis["complexity"]["cyclomatic"] == 3
    assert any("reserve" in s for s in analysis["performance"]["suggestions"])
    assert 0 <= analysis["style"]["readabilityScore"] <= 10
    aspects = {o["aspect"] for o in analysis["style"]["observations"]}
    assert {"Variable naming", "Comments", "Error handling", "Edge cases"} <= aspects


def test_analyze_straight_line_code():
    analysis = analyze_cpp_code("int add(int a, int b) {\n    return a + b;\n}\n")
    assert analysis["performance"]["estimatedComplexity"] == "O(1)"
    assert analysis["complexity"]["classes"] == 0


def test_run_cpp_action_unknown():
    with pytest.raises(ValueError):
        run_cpp_action("optimize", "int x;")


def test_cpp_tools_endpoint(client):
    resp = client.post("/api/cpp-tools", json={"action": "format", "code": "while(true){}"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["changes"] == 1
    assert body["message"] == "Formatted code with 1 changes"

    lint = client.post("/api/cpp-tools", json={"action": "lint", "code": "using namespace std;"}).get_json()
    assert lint["diagnostics"][0]["code"] == "W001"
    assert lint["summary"]["warnings"] == 1

    analysis = client.post("/api/cpp-tools", json={"action": "analyze", "code": FIB}).get_json()
    assert "complexity" in analysis["analysis"]

    compiled = client.post("/api/cpp-tools", json={"action": "compile", "code": FIB}).get_json()
    assert compiled["success"] is True
    assert compiled["compilationTime"] == "0.234s"
    assert compiled["warnings"] == []


def test_cpp_tools_validation(client):
    resp = client.post("/api/cpp-tools", json={"action": "lint"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Code is required"

    resp = client.post("/api/cpp-tools", json={"action": "optimize", "code": "int x;"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid action"
