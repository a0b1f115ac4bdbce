class BatchError(Exception):
    """
    Base class for every error raised while building or proposing a batch.
    None of them are recovered locally: they abort the run.
    """


class ConfigKeyMissingError(BatchError):
    def __init__(self, key, chain=None):
        self.key = key
        self.chain = chain
        where = f" for chain {chain}" if chain else ""
        super().__init__(f"Configuration key `{key}` is missing{where}")


class StateReadError(BatchError):
    def __init__(self, target, descriptor, message="State read failed"):
        self.target = target
        self.descriptor = descriptor
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}: {self.descriptor} on {self.target}"


class GuardEvaluationError(BatchError):
    """
    A guard could not tell whether its precondition holds. The original
    error is available as `__cause__`.
    """

    def __init__(self, guard, message="Guard evaluation failed"):
        self.guard = guard
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        description = getattr(self.guard, "description", None) or repr(self.guard)
        return f"{self.message} ({description})"


class UnknownChainError(BatchError):
    def __init__(self, chain):
        self.chain = chain
        super().__init__(f"Unknown chain `{chain}`")


class AlreadyFinalizedError(BatchError):
    def __init__(self, message="Batch has already been finalized"):
        super().__init__(message)


class EmptyBatchError(BatchError):
    def __init__(self, message="Batch has no operations to propose"):
        super().__init__(message)


class InvalidTargetError(BatchError):
    def __init__(self, target, message="Invalid target"):
        self.target = target
        super().__init__(f"{message}: {target!r}")


class ProposalError(BatchError):
    def __init__(self, status_code, response_text, message="Failed to propose Safe transaction"):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(f"{message}: {status_code}")


class BatchScriptError(BatchError):
    def __init__(self, contract, function=None, message="Batch script not found"):
        self.contract = contract
        self.function = function
        name = f"{contract}.{function}" if function else contract
        super().__init__(f"{message}: {name}")


class SafeAccountError(BatchError):
    """
    The Safe cannot take a proposal: no Transaction Service for its chain,
    or no owner to propose as.
    """

    def __init__(self, message, safe=None):
        self.safe = safe
        where = f" ({safe})" if safe else ""
        super().__init__(f"{message}{where}")


class BatchArgumentError(BatchError):
    def __init__(self, name, value, message="Invalid batch argument"):
        self.name = name
        self.value = value
        super().__init__(f"{message}: `{name}` = {value!r}")
