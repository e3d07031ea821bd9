"""
DirectWrite / Direct2D binding configuration

Configures the generator for the `dwrite` Odin package:
- DirectWrite, Direct2D and Direct2D.Common namespaces
- dwrite.lib and d2d1.lib foreign blocks
- Hand-written stand-ins for WIC / printing interfaces and GDI structs
  that live outside those namespaces
"""

from winmd_bindgen import BindingConfig, Generator, Import, ImportLib


NAMESPACES = [
    'Windows.Win32.Graphics.DirectWrite',
    'Windows.Win32.Graphics.Direct2D',
    'Windows.Win32.Graphics.Direct2D.Common',
]

IMPORT_LIBS = [
    ImportLib('dwrite', 'DWrite'),
    ImportLib('d2d1', 'D2D1'),
]

IMPORTS = [
    Import('core:sys/windows', 'win32'),
    Import('vendor:directx/dxgi'),
    Import('vendor:directx/d3d11'),
]

# ==============================================================================
# Manual Type Overrides
# ==============================================================================

PREAMBLE = '''
LOGFONTA :: struct {} // Use the LOGFONTW functions instead.
FONTSIGNATURE :: struct {
\tUsb: [4]win32.DWORD,
\tCsv: [4]win32.DWORD,
}

IWICBitmapSource :: struct { #subtype parent: win32.IUnknown }
IWICBitmap :: struct { #subtype parent: win32.IUnknown }
IWICColorContext :: struct { #subtype parent: win32.IUnknown }
IWICImagingFactory :: struct { #subtype parent: win32.IUnknown }
IPrintDocumentPackageTarget :: struct { #subtype parent: win32.IUnknown }
'''


# ==============================================================================
# Configuration
# ==============================================================================

def configure() -> Generator:
    """Create a generator with DirectWrite/Direct2D settings"""
    config = BindingConfig('dwrite')
    config.namespaces = list(NAMESPACES)
    config.import_libs = list(IMPORT_LIBS)
    config.imports = list(IMPORTS)
    config.preamble = PREAMBLE
    return Generator(config)
