from .config import ConverterSettings, OverflowSettings
from .converter import ConversionResult, convert_json_to_excel
from .errors import AnnotationAttachError, ConversionError, EmptyDataError, LoadError, WriteError

__all__ = [
	"ConverterSettings",
	"OverflowSettings",
	"ConversionResult",
	"convert_json_to_excel",
	"ConversionError",
	"LoadError",
	"EmptyDataError",
	"AnnotationAttachError",
	"WriteError",
]

__version__ = "0.1.0"
