"""Error classes for pbdbtax."""

class PbdbError(Exception):
    """Base class for pbdbtax exceptions."""
    pass

class InputError(PbdbError):
    """Raised when there's an issue with input files."""
    pass

class LineageError(PbdbError):
    """Raised when a single genus or subgenus cannot be resolved."""
    pass

class MalformedCompoundNameError(LineageError):
    """Raised when a subgenus name is not of the form 'Genus (Subgenus)'."""
    pass

class CycleDetectedError(LineageError):
    """Raised when a parent chain revisits a taxon."""
    pass

class AuditError(PbdbError):
    """Raised when the lineage table cannot be audited."""
    pass

class IntervalError(PbdbError):
    """Raised when there's an issue with stratigraphic intervals."""
    pass
