"""Shared output snippets for the builtin scripts."""


def println(message: str) -> str:
  """Returns a `println!` invocation printing `message` verbatim."""
  return f'println!("{message}")'
