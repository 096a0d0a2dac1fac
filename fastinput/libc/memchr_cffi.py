"""
CFFI-based bindings for the C runtime byte search used by the reader.
Declares memchr and loads it from the platform C library.
"""

import logging

from cffi import FFI

logger = logging.getLogger(__name__)

ffi = FFI()

ffi.cdef(
    """
    void * memchr(const void * s, int c, size_t n);
"""
)


def load_c_library():
    """
    Load the C runtime library that provides memchr.

    On POSIX systems the C library is already mapped into the interpreter, so
    it is opened with a NULL name. Windows has no such handle and the
    universal CRT is tried first, then the legacy msvcrt.

    Returns:
        FFI library object exposing memchr

    Raises:
        OSError: If no C runtime library can be loaded
    """
    import platform

    if platform.system() == "Windows":
        library_names = ["ucrtbase", "msvcrt"]
    else:
        library_names = [None]

    last_error = None
    for lib_name in library_names:
        try:
            lib = ffi.dlopen(lib_name)
            logger.debug("Loaded C runtime %s for byte scanning", lib_name or "<process>")
            return lib
        except OSError as e:
            last_error = e
            continue

    raise OSError(
        f"C runtime library could not be loaded. Tried: "
        f"{', '.join(name or '<process>' for name in library_names)}. "
        f"Last error: {last_error}"
    )


# Load the library once at module import
libc = load_c_library()
