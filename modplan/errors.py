"""Exceptions raised by the requirement engine.

Construction-time errors (building a Directory, compiling rule trees) are
unrecoverable: callers should abort the evaluation that triggered them.
A module list that simply fails to meet a requirement is never an error;
it is reported as ``satisfied=False`` on the result tree.
"""


class ModplanError(Exception):
    """Base class for all modplan errors."""

    pass


class DuplicateIdentifierError(ModplanError):
    """Raised when a block identifier is registered twice in a Directory."""

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"block '{block_id}' already exists")


class BlockNotFoundError(ModplanError):
    """Raised when neither the bare nor the prefixed identifier resolves."""

    def __init__(self, block_id: str, candidates: list[str]):
        self.block_id = block_id
        self.candidates = candidates
        tried = ", ".join(f"'{c}'" for c in candidates)
        super().__init__(f"block '{block_id}' does not exist (tried {tried})")


class MalformedInequalityError(ModplanError):
    """Raised when an MC bound is not of the form '<=N' or '>=N'."""

    def __init__(self, text: object):
        self.text = text
        super().__init__(
            f"inequality {text!r} is malformed; expected '<=n' or '>=n' "
            "for some non-negative integer n"
        )


class MalformedRuleTreeError(ModplanError):
    """Raised when a rule matches none of the known rule shapes."""

    def __init__(self, kind: str, rule: object):
        self.kind = kind
        self.rule = rule
        super().__init__(f"{kind} rule is not well-defined: {rule!r}")


class CircularReferenceError(ModplanError):
    """Raised when satisfy rules reference a block that is already being evaluated."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__("circular block reference: " + " -> ".join(chain))


class BlockValidationError(ModplanError):
    """Raised when an authored block literal fails schema validation."""

    def __init__(self, issues: list, source: str | None = None):
        self.issues = issues
        self.source = source
        head = f"{source}: " if source else ""
        details = "; ".join(f"{i.location}: {i.message}" for i in issues)
        super().__init__(f"{head}block is invalid ({details})")


class BlockLoadError(ModplanError):
    """Raised when a block file cannot be read or decoded."""

    def __init__(self, path: object, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to load block from {path}: {reason}")
