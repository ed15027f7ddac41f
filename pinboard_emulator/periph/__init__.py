from .keyboard import KeyboardPeripheral
from .printer import PrinterPeripheral, PrintEvent, format_event
