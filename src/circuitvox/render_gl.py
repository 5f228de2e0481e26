from __future__ import annotations

import ctypes
import logging

import numpy as np
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_COLOR_ARRAY,
    GL_ELEMENT_ARRAY_BUFFER,
    GL_FLOAT,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_STATIC_DRAW,
    GL_TRIANGLES,
    GL_UNSIGNED_INT,
    GL_VERTEX_ARRAY,
    glBindBuffer,
    glBufferData,
    glColorPointer,
    glDeleteBuffers,
    glDisableClientState,
    glDrawElements,
    glEnableClientState,
    glGenBuffers,
    glLoadMatrixf,
    glMatrixMode,
    glVertexPointer,
)

from .linalg import Mat4
from .mesh import WorldMesh
from .primitives import VERTEX_DTYPE

logger = logging.getLogger(__name__)

_STRIDE = VERTEX_DTYPE.itemsize
_POS_OFFSET = VERTEX_DTYPE.fields["pos"][1]
_COLOR_OFFSET = VERTEX_DTYPE.fields["color"][1]


class GLMeshRenderer:
    """Rendering backend: owns one vertex and one index buffer object.

    Each upload replaces both buffers wholesale; there is no partial update.
    """

    def __init__(self) -> None:
        self._vbo: int | None = None
        self._ibo: int | None = None
        self._index_count = 0

    def _ensure_buffers(self) -> None:
        if self._vbo is not None and self._ibo is not None:
            return
        vbo, ibo = glGenBuffers(2)
        self._vbo = int(vbo)
        self._ibo = int(ibo)

    def upload(self, mesh: WorldMesh) -> None:
        self._index_count = mesh.index_count
        if mesh.index_count == 0:
            return
        self._ensure_buffers()
        verts = np.ascontiguousarray(mesh.vertices).view(np.float32)
        inds = np.ascontiguousarray(mesh.indices, dtype=np.uint32)
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        glBufferData(GL_ARRAY_BUFFER, verts.nbytes, verts, GL_STATIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._ibo)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, inds.nbytes, inds, GL_STATIC_DRAW)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)
        logger.debug("uploaded %d vertices, %d indices", mesh.vertex_count, mesh.index_count)

    def draw(self, view: Mat4, projection: Mat4) -> None:
        glMatrixMode(GL_PROJECTION)
        glLoadMatrixf(projection.column_major())
        glMatrixMode(GL_MODELVIEW)
        glLoadMatrixf(view.column_major())
        if self._index_count == 0:
            return

        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._ibo)
        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_COLOR_ARRAY)
        glVertexPointer(3, GL_FLOAT, _STRIDE, ctypes.c_void_p(_POS_OFFSET))
        glColorPointer(3, GL_FLOAT, _STRIDE, ctypes.c_void_p(_COLOR_OFFSET))
        glDrawElements(GL_TRIANGLES, self._index_count, GL_UNSIGNED_INT, ctypes.c_void_p(0))
        glDisableClientState(GL_COLOR_ARRAY)
        glDisableClientState(GL_VERTEX_ARRAY)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

    def release(self) -> None:
        if self._vbo is None:
            return
        glDeleteBuffers(2, [self._vbo, self._ibo])
        self._vbo = None
        self._ibo = None
        self._index_count = 0
