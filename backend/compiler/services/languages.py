"""Supported languages.

Clients mirror this table through ``GET /compile/languages``; the run and
template endpoints both validate against it, so the two never disagree on
what a language is.
"""
from dataclasses import dataclass

from compiler.core.errors import UnsupportedLanguage


@dataclass(frozen=True)
class Language:
    key: str
    name: str
    engine_id: int
    template: str


_C_TEMPLATE = """#include <stdio.h>

int main() {
    printf("Hello, World!\\n");
    return 0;
}"""

_CPP_TEMPLATE = """#include <iostream>
using namespace std;

int main() {
    cout << "Hello, World!" << endl;
    return 0;
}"""

_JAVA_TEMPLATE = """public class Main {
    public static void main(String[] args) {
        System.out.println("Hello, World!");
    }
}"""

# engine ids follow the Judge0 numbering the client already knows
LANGUAGES: dict[str, Language] = {
    lang.key: lang
    for lang in (
        Language("c", "C", 50, _C_TEMPLATE),
        Language("cpp", "C++", 54, _CPP_TEMPLATE),
        Language("python", "Python", 71, 'print("Hello, World!")'),
        Language("java", "Java", 62, _JAVA_TEMPLATE),
        Language("javascript", "JavaScript", 63, 'console.log("Hello, World!");'),
    )
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(LANGUAGES)


def get_language(key: str | None) -> Language:
    try:
        return LANGUAGES[key]
    except (KeyError, TypeError):
        raise UnsupportedLanguage(key, SUPPORTED_LANGUAGES) from None
