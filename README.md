# krua

Small tools for a k-like array language, written in plain Python with no
dependencies beyond the standard library.

- `krua.mini` is a compact interpreter that evaluates a line of source
  directly, right to left. It handles integer, float and character atoms and
  vectors, general lists, dictionaries, single-letter variables (`a` to `z`),
  monadic and dyadic verbs (`+ - * % ! & | < > = ~ , # _ ? @ $`) and the
  adverbs `'`, `/`, `\`, `/:`, `\:` and `':`.
- `krua.skrawl` holds a richer object model (`krua.skrawl.kobject`: symbols,
  dictionaries, tables, operator values, projections, compositions and
  adverb-modified values), a tokenizer (`krua.skrawl.tokens`) and the
  structural verbs (`krua.skrawl.structure`: match, find, join, take, drop,
  flip, first, reverse, where, grading, distinct, type and count, and
  dictionary upserts).

## Installation

```
pip install .
```

## The REPL

```
krua
```

starts an interactive session reading lines from standard input. Type an
expression and the result is printed:

```
 1 2 3+10
11 12 13
 !5
0 1 2 3 4
 a:2*!4
0 2 4 6
 +/a
12
```

Errors are printed as short messages such as `'typ`, `'len` or `'nyi`.
Enter `\\` to leave the session; the session also ends at end of input.

## Using the interpreter from Python

```python
from krua.mini.interp import Interpreter
from krua.mini.kobject import format_k

interp = Interpreter()
interp.evaluate("x:1 2 3")
print(format_k(interp.evaluate("x*x")))
```

`Interpreter.get` and `Interpreter.set` read and write variables directly, and
`krua.mini.interp.tokenize` exposes the tokenizer.

## Using the object and verb libraries

Objects are built with the helpers in each `kobject` module, and verbs are
ordinary functions that take and return them:

```python
from krua.mini import kobject, verbs

v = kobject.vector(kobject.KType.INT, [3, 1, 2])
print(kobject.format_k(verbs.add(v, kobject.int_atom(10))))
print(kobject.format_k(verbs.reverse(v)))
```

```python
from krua.skrawl import kobject, structure, tokens

v = kobject.vector(kobject.KType.INT, [2, 1, 7])
print(kobject.format_k(structure.asc(v), True))
print(kobject.format_k(structure.take(kobject.ki(-2), v), True))
print([t.type.name for t in tokens.tokenize("x+/1 2")])
```

Errors in evaluation are raised as `KError` from the matching `kobject`
module, carrying a readable `message`.

## What is not included

`krua.skrawl` has no parser, evaluator or REPL of its own: it provides
objects, tokens and structural verbs only. Its arithmetic and comparison
verbs, function application, projections being filled in, and the adverbs
that drive them are not part of this package, so `krua.skrawl` values cannot
be added, compared or applied. Arithmetic and adverbs are available in
`krua.mini`.

## Running the tests

```
pip install .[test]
pytest
```