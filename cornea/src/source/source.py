from ..math.vector import Vector


class Light:
    '''
    Point light source. A Scene stores only the position, keyed by `identity`.
    '''
    def __init__(self, identity: int, position: Vector):
        self.identity = identity
        self.position = position

    def __repr__(self):
        return f"Light(identity={self.identity!r}, position={self.position!r})"
