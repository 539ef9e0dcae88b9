"""Services subpackage - the interactive calculator session."""
from .calculator_service import CalculatorSession, CopyResult

__all__ = ['CalculatorSession', 'CopyResult']
