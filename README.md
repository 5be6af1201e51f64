# minitools

A handful of small command-line tools:

- a front end for a tiny imperative language: a lexical analyser, a syntax
  checker, and a translator into reverse Polish notation (POLIZ) with type
  checking;
- a toy command shell with pipes, redirections, background jobs and `;`,
  `&&`, `||` chaining;
- an interactive rectangle calculator.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The language tools

Programs in the toy language look like this:

```
program
{
    int a = 5, b;
    real r = 1.5;
    string s = "text";
    read(b);
    while (a > 0) a = a - 1;
    for (b = 0; b < 10; b++) write(b);
}
```

The commands:

```
minitools-lexdump program.txt     # list every lexeme with its table and index
minitools-syntax program.txt      # print OK or report the first unexpected lexeme
minitools-translate program.txt   # type-check and print the numbered POLIZ, then OK
```

`minitools-lexdump` reads standard input when no file is given.
`minitools-syntax` and `minitools-translate` read `1.txt` in the current
directory when no file is given.

The same work is available from Python:

```python
from minitools.lang.lexer import IdentTable, tokenize
from minitools.lang.syntax import check
from minitools.lang.translator import translate
from minitools.lang.poliz import format_poliz

source = 'program { int x = 1; x = x + 2; }'
lexemes = tokenize(source, IdentTable())   # list of Lex, ending with FIN
check(source)                              # returns the identifier table
print(format_poliz(translate(source)), end="")
```

- `minitools.lang.lexer`: `Scanner`, `tokenize`, `Lex`, `LexType`,
  `IdentTable`, `Ident`, `LexError`.
- `minitools.lang.lexdump`: `scan`, `format_token`, `dump`, `DumpToken`.
- `minitools.lang.syntax`: `SyntaxChecker`, `check`, `UnexpectedLexeme`.
- `minitools.lang.translator`: `Translator`, `translate`, `SemanticError`.
- `minitools.lang.poliz`: `PolizItem`, `PolizKind`, `format_poliz`.

Lexical errors are raised as `LexError`, grammar errors as `UnexpectedLexeme`,
and type or declaration errors as `SemanticError`.

## The shell

```
minitools-shell              # read commands from standard input
minitools-shell -i script    # read commands from a file
```

It prints the current directory as a prompt and supports `cd` (home without
an argument), `|`, `<`, `>`, `>>`, a trailing `&` for a background job, and
`;`, `&&`, `||` between commands. Ctrl-C is ignored while it runs. After each
line it prints the state of every tracked background job ("Still working" or
its exit status) and stops tracking the finished ones. A line that ends
inside an open double quote is reported as an error.

To see how lines are split into words without running anything:

```
minitools-tokenize
minitools-tokenize -i script
```

From Python, `minitools.shell.tokenizer.split_line` returns the words of a
single line; `minitools.shell.runner` offers `parse_pipeline`,
`run_pipeline` and `change_directory`; `minitools.shell.jobs.JobTable`
tracks background processes; `minitools.shell.main.run_line` runs one
tokenized line.

## The rectangle calculator

```
minitools-rect
```

Enter the corners of two rectangles, then any of the commands `see`,
`move1`, `move2`, `change1`, `change2`, `union`, `cross`, and `end` to quit.
The `Rectangle` class in `minitools.rectangle` offers the same operations as
`move`, `resize`, `union` and `cross`.

## What is not included

- The translator produces POLIZ code but nothing executes it; there is no
  interpreter for the language.
- The shell has no variables, globbing, subshells or job-control commands
  (`fg`, `bg`, `jobs`); parentheses are split off as words but not grouped.