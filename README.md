# llmfmt

Building blocks for working with `.llm` files, a compact indentation-based
format for describing LLM prompts with the top-level keys `agent`, `system`,
`user`, `memory`, `tools`, `output`, `constraints` and `vars`.

## What is in the package

- `llmfmt.diagnostics` – `Span` (1-based line and column), `Severity`,
  `DiagnosticPhase`, `Diagnostic`, `DiagnosticBag` and the `DiagnosticError`
  exception. A `Diagnostic` has a phase (syntax or semantic), a severity, a
  message, an optional span and an optional code such as `E006`; it is built
  with `Diagnostic.syntax_error`, `semantic_error`, `syntax_warning` or
  `semantic_warning`, and `with_code` returns a copy carrying a code.
  A `DiagnosticBag` collects diagnostics in order (`push`, `extend`,
  `has_errors`, `is_empty`, iteration, `len`). `DiagnosticError` carries a bag
  in its `diagnostics` attribute.
- `llmfmt.ast` – the document model: `Document` with one optional field per
  top-level key plus `include`; the node kinds `Scalar`, `Sequence` and
  `Mapping` (all subclasses of `Node`, with `kind_name()`); `MappingEntry`;
  and the `TopLevelKey` enum, whose `ordered()` gives the canonical key order
  and `from_keyword()` looks a key up by name. Node equality ignores spans.
- `llmfmt.lexer` – `tokenize_lines`, which turns source text into one
  `LineToken` per meaningful line. Blank lines and `#` comment lines are
  skipped; each token holds its indentation and either a `MappingLine`
  (`key:` with an optional inline value) or a `ListItemLine` (`-` with an
  optional inline value). Quoted scalars (single or double quotes) support the
  escapes `\\`, `\"`, `\'`, `\n`, `\r` and `\t`.
- `llmfmt.formatter` – `format_document` renders a `Document` in canonical
  form: keys in canonical order, two-space indentation, and `format_scalar`
  quoting only values that are not made of ASCII letters, digits, `_` and `-`.
- `llmfmt.include` – `resolve_include_paths` joins a document's `include`
  paths (a scalar or a sequence of scalars) onto a directory, and
  `check_circular` reports an include that is already in the inclusion chain.
  Paths that do not exist never count as circular.

## Installation

Install it with pip like any other package; there are no runtime
dependencies. The `test` extra installs pytest.

## Usage

Tokenizing source text:

```python
from llmfmt.lexer import tokenize_lines

source = "agent: DataExtractor\nsystem:\n  role: financial_analyst\n"
for token in tokenize_lines(source):
    print(token.indent, token.span())
```

Malformed input raises `DiagnosticError`, which collects every line's error;
its text looks like this:

```text
syntax error at 1:6: [E006] expected `:` after mapping key
```

Building and formatting a document:

```python
from llmfmt.ast import Document, Mapping, MappingEntry, Scalar, Sequence
from llmfmt.formatter import format_document, format_scalar

doc = Document(
    agent=Scalar("DataExtractor"),
    system=Mapping([MappingEntry("role", Scalar("financial analyst"))]),
    memory=Sequence([Scalar("user_history")]),
)
print(format_document(doc))
# agent: DataExtractor
# system:
#   role: "financial analyst"
# memory:
#   - user_history

format_scalar("user_history")     # 'user_history'
format_scalar("Data Extractor")   # '"Data Extractor"'
```

Resolving includes:

```python
from llmfmt.ast import Document, Sequence, Scalar
from llmfmt.include import resolve_include_paths

doc = Document(include=Sequence([Scalar("a.llm"), Scalar("b.llm")]))
resolve_include_paths(doc, "/project")   # [Path('/project/a.llm'), Path('/project/b.llm')]
```

## Diagnostic codes

| Code | Meaning                                              |
|------|------------------------------------------------------|
| E001 | tabs are not supported                               |
| E002 | indentation is not a multiple of two spaces          |
| E003 | missing space after `-` in a list item               |
| E004 | expected a mapping entry or list item                |
| E005 | mapping entry does not start with an identifier      |
| E006 | missing `:` after a mapping key                      |
| E007 | expected a scalar value                              |
| E008 | trailing characters after a quoted scalar            |
| E009 | unterminated escape sequence                         |
| E010 | unsupported escape sequence                          |
| E011 | unterminated quoted scalar                           |
| E023 | `include` given as a mapping                         |
| E115 | empty or absolute include path                       |
| E116 | circular include                                     |

## What the package does not do

- It has no parser that builds a `Document` from line tokens; documents are
  constructed in code from the `llmfmt.ast` classes.
- It does not validate documents (required keys, value shapes, variable
  references), does not read or merge included files, and does not render
  documents into any output other than the canonical `.llm` text.
- It has no command-line tool and makes no network calls.