from .settings import ConverterSettings, converter_settings

__all__ = ['ConverterSettings', 'converter_settings']
