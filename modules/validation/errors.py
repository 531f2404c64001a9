from typing import Any, Mapping, Sequence, Union

ErrorLocation = Sequence[Union[str, int]]
ROOT_ERROR_KEY = "root"

def format_error_location(loc: ErrorLocation)->str:
  return '.'.join(map(str, loc))

def summarize_errors(errors: Sequence[Mapping[str, Any]])->str:
  """Joins every error into one line so that clients see all of the failing fields at once rather than just the first."""
  messages: list[str] = []
  for error in errors:
    location = format_error_location(error["loc"])
    if len(location) > 0:
      messages.append(f"{error['msg']} at \"{location}\"")
    else:
      messages.append(str(error['msg']))
  return f"Validation error: {'; '.join(messages)}"

def build_error_tree(errors: Sequence[Mapping[str, Any]])->dict[Union[str, int], Any]:
  tree: dict[Union[str, int], Any] = {}
  for error in errors:
    error_path = tuple(error["loc"])
    if len(error_path) == 0:
      error_path = (ROOT_ERROR_KEY,)

    error_mapper = tree
    for loc in error_path[:-1]:
      # Nest into the error tree
      child = error_mapper.get(loc, None)
      if not isinstance(child, dict):
        child = {}
        error_mapper[loc] = child
      error_mapper = child

    # Keep the first message if a field has multiple errors
    error_mapper.setdefault(error_path[-1], str(error["msg"]))
  return tree

__all__ = [
  "build_error_tree",
  "summarize_errors",
  "format_error_location",
]
