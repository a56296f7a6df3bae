"""
PDF Engine Custom Exceptions
"""


class PdfEngineError(Exception):
    """Base exception for the PDF composition engine"""
    pass


class ExportBusy(PdfEngineError):
    """An export was requested while another one is still in flight"""
    def __init__(self, filename: str = ""):
        self.filename = filename
        super().__init__(
            f"An export is already in progress; retry '{filename}' once it settles"
            if filename else "An export is already in progress"
        )


class ExportFailed(PdfEngineError):
    """Export aborted; the underlying error is kept on `cause`"""
    def __init__(self, message: str, cause: BaseException = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class MeasurementError(ExportFailed):
    """Font metrics unavailable for a requested style"""
    def __init__(self, font_name: str, cause: BaseException = None):
        self.font_name = font_name
        super().__init__(f"No metrics for font '{font_name}'", cause)


class StyleNotFoundError(PdfEngineError, KeyError):
    """No style registered for a block kind / role"""
    def __init__(self, kind: str, role: str = None):
        self.kind = kind
        self.role = role
        label = f"{kind}.{role}" if role else kind
        super().__init__(f"No style defined for '{label}'")

    def __str__(self) -> str:
        return self.args[0]
