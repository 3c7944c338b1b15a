"""Helpers building in-memory scene descriptions for tests."""

from readers import SceneDescriptionReader

PUPPET_PIN = "ADBE FreePin3 PosPin"


def _value(value):
    if isinstance(value, tuple):
        return list(value)
    return value


def make_transform(position=(960, 540), anchor_point=(0, 0), scale=(100, 100),
                   rotation=0, opacity=100, matrix=None):
    transform = {
        'position': _value(position),
        'anchorPoint': _value(anchor_point),
        'scale': _value(scale),
        'rotation': rotation,
        'opacity': opacity,
    }
    if matrix is not None:
        transform['matrix'] = matrix
    return transform


def make_layer(name="Layer", transform=None, **extra):
    layer = {
        'name': name,
        'matchName': 'ADBE AV Layer',
        'transform': transform if transform is not None else make_transform(),
    }
    layer.update(extra)
    return layer


def make_composition(layers, name="Comp 1", duration=1.0, frame_rate=10, width=1920, height=1080):
    return {
        'type': 'composition',
        'name': name,
        'width': width,
        'height': height,
        'duration': duration,
        'frameRate': frame_rate,
        'layers': list(layers),
    }


def make_document(*compositions, extra_items=()):
    return {'name': 'Test Project', 'items': list(compositions) + list(extra_items)}


def make_corner_pin(top_left=(0, 0), top_right=(100, 0), bottom_right=(100, 100), bottom_left=(0, 100)):
    return {
        'name': 'Corner Pin',
        'matchName': 'ADBE Corner Pin',
        'properties': [
            {'name': 'Top Left', 'value': _value(top_left)},
            {'name': 'Top Right', 'value': _value(top_right)},
            {'name': 'Bottom Right', 'value': _value(bottom_right)},
            {'name': 'Bottom Left', 'value': _value(bottom_left)},
        ],
    }


def make_puppet(properties):
    return {'name': 'Puppet', 'matchName': 'ADBE FreePin3', 'properties': list(properties)}


def make_pin(name, position, match_name=PUPPET_PIN):
    return {'name': name, 'matchName': match_name, 'value': _value(position)}


def make_mesh_warp(rows, columns):
    """Grid whose vertex (r, c) sits at (c * 10, r * 100)"""
    return {
        'rows': rows,
        'columns': columns,
        'vertices': [[c * 10, r * 100] for r in range(rows) for c in range(columns)],
    }


def load_composition(document, selector=None):
    return SceneDescriptionReader.from_document(document).find_composition(selector)


def load_layer(layer, **composition_args):
    comp = load_composition(make_document(make_composition([layer], **composition_args)))
    return comp.get_layers()[0]
