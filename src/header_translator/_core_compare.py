from __future__ import annotations

from ._core_base import *  # noqa: F401,F403
from ._core_model import *  # noqa: F401,F403


def describe_key_difference(left: set[str], right: set[str], label_a: str, label_b: str) -> str:
    parts: list[str] = []
    only_left = sorted(left - right)
    only_right = sorted(right - left)
    if only_left:
        parts.append(f"only in {label_a}: {', '.join(only_left)}")
    if only_right:
        parts.append(f"only in {label_b}: {', '.join(only_right)}")
    return "; ".join(parts)


def compare_files(
    library_name: str,
    file_name: str,
    file_a: File,
    file_b: File,
    label_a: str,
    label_b: str,
) -> None:
    statements_a = file_a.statements
    statements_b = file_b.statements
    for index, (stmt_a, stmt_b) in enumerate(zip(statements_a, statements_b)):
        if stmt_a != stmt_b:
            raise StructuralMismatchError(
                f"Library '{library_name}', file '{file_name}', statement {index} differs: "
                f"{label_a} has {stmt_a.describe()} {stmt_a.details}; "
                f"{label_b} has {stmt_b.describe()} {stmt_b.details}"
            )
    if len(statements_a) != len(statements_b):
        shorter, longer, longer_label = (
            (statements_a, statements_b, label_b)
            if len(statements_a) < len(statements_b)
            else (statements_b, statements_a, label_a)
        )
        extra = longer[len(shorter)]
        raise StructuralMismatchError(
            f"Library '{library_name}', file '{file_name}' has {len(statements_a)} statements in {label_a} "
            f"and {len(statements_b)} in {label_b}; first extra statement in {longer_label}: {extra.describe()}"
        )


def compare_libraries(library_name: str, library_a: Library, library_b: Library, label_a: str, label_b: str) -> None:
    names_a = set(library_a.files.keys())
    names_b = set(library_b.files.keys())
    if names_a != names_b:
        raise StructuralMismatchError(
            f"Library '{library_name}' has different files: "
            + describe_key_difference(names_a, names_b, label_a, label_b)
        )
    for file_name in sorted(names_a):
        compare_files(
            library_name,
            file_name,
            library_a.files[file_name],
            library_b.files[file_name],
            label_a,
            label_b,
        )


def compare_results(
    result_a: dict[str, Library],
    result_b: dict[str, Library],
    label_a: str = "first",
    label_b: str = "second",
) -> None:
    """Fail on the first difference between two parses of the same SDK.

    Both results are keyed by the configured framework names, so differing
    key sets point at a pipeline bug rather than at the headers.
    """
    keys_a = set(result_a.keys())
    keys_b = set(result_b.keys())
    if keys_a != keys_b:
        raise StructuralMismatchError(
            "Results are keyed by different libraries: " + describe_key_difference(keys_a, keys_b, label_a, label_b)
        )

    for library_name in sorted(keys_a):
        print(f"comparing {library_name}")
        compare_libraries(library_name, result_a[library_name], result_b[library_name], label_a, label_b)

    # In case the walk above was not exhaustive.
    if result_a != result_b:
        raise StructuralMismatchError(f"Results for {label_a} and {label_b} differ")
