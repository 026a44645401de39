"""
Custom exceptions for the POM Version Manager.
"""


class VManError(Exception):
    """Base exception class for all version manager errors."""
    pass


class PomParseError(VManError):
    """Raised when a POM file cannot be parsed."""
    
    def __init__(self, message: str, file_path: str = None, line_number: int = None):
        self.file_path = file_path
        self.line_number = line_number
        
        if file_path:
            message = f"Error parsing POM file '{file_path}': {message}"
            if line_number:
                message += f" (line {line_number})"
        
        super().__init__(message)


class BomLoadError(VManError):
    """Raised when a BOM, BOM list or toolchain POM cannot be loaded."""
    
    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path
        
        if file_path:
            message = f"Cannot load '{file_path}': {message}"
        
        super().__init__(message)


class ModificationError(VManError):
    """Raised when a modder or verifier fails on a specific project."""
    
    def __init__(self, message: str, component: str = None, file_path: str = None):
        self.component = component
        self.file_path = file_path
        
        if component:
            message = f"{component} failed: {message}"
        if file_path:
            message += f" (pom: {file_path})"
        
        super().__init__(message)


class VerificationError(VManError):
    """Recorded when a verifier finds a problem in a project."""
    
    def __init__(self, message: str, verifier: str = None):
        self.verifier = verifier
        super().__init__(message)


class ConfigurationError(VManError):
    """Raised when configuration is invalid."""
    pass


class ReportGenerationError(VManError):
    """Raised when report generation fails."""
    
    def __init__(self, message: str, format_name: str = None, output_path: str = None):
        self.format_name = format_name
        self.output_path = output_path
        
        if format_name:
            message = f"Report generation error for format '{format_name}': {message}"
            if output_path:
                message += f" (output: {output_path})"
        
        super().__init__(message)
