"""
Contract Errors

Every failure raised by a contract operation aborts the transaction.
The gateway rolls back the write set and reports the message to the submitter.
"""


class ContractError(Exception):
    """Base class for all contract failures"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================================
# Not Found
# ============================================================================


class NotFoundError(ContractError):
    """A referenced entity does not exist on the ledger"""
    pass


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str):
        super().__init__(f"project does not exist: {project_id}")
        self.project_id = project_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"user does not exist: {user_id}")
        self.user_id = user_id


class TransactionNotFoundError(NotFoundError):
    def __init__(self, tx_id: str):
        super().__init__(f"transaction does not exist: {tx_id}")
        self.tx_id = tx_id


# ============================================================================
# Invalid State
# ============================================================================


class InvalidStateError(ContractError):
    """The entity is not in a state that allows the operation"""
    pass


class GoalNotReachedError(InvalidStateError):
    def __init__(self, project_id: str):
        super().__init__("goal amount not reached")
        self.project_id = project_id


class ProjectClosedError(InvalidStateError):
    def __init__(self, project_id: str):
        super().__init__("project is already closed")
        self.project_id = project_id


# ============================================================================
# Arguments, encoding and storage
# ============================================================================


class InvalidArgumentError(ContractError):
    """An input failed validation before any ledger access"""
    pass


class SerializationError(ContractError):
    """A record could not be encoded or decoded"""
    pass


class StorageError(ContractError):
    """The ledger access layer failed to read, write or query"""
    pass


class MVCCReadConflictError(StorageError):
    """A key read by the transaction was changed by another committed transaction"""

    def __init__(self, key: str):
        super().__init__(f"read conflict on key {key!r}: state changed since it was read")
        self.key = key
