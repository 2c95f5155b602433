"""
project: Geomorph Dungeon Generator
module: generate_api.py

Dungeon generation API routes.

Generates maps from a settings body and exposes the room template catalog so
clients can render room shapes. Nothing is stored server side; every request
builds its own generation run.
"""
from flask import Blueprint, current_app, jsonify, request

from geomorph.dungeon import GenerationSettings, InvalidSettingsError, merge_adjacent_corridors, run_generation
from geomorph.dungeon.analysis import analyze
from geomorph.dungeon.models import RoomType
from geomorph.dungeon.templates import ALL_ROOM_TEMPLATES, get_template_by_id, get_templates_by_type
from geomorph.logging_utils import get_logger
from geomorph.validation import validate

bp_generate = Blueprint('generate_api', __name__)
log = get_logger("geomorph.routes.generate_api")

REQUEST_SCHEMA = {
    'merge': ('bool', False),
}


def _defaults_from_config():
    cfg = current_app.config
    return {
        'grid_size': cfg.get('GEOMORPH_DEFAULT_GRID_SIZE'),
        'room_count': cfg.get('GEOMORPH_DEFAULT_ROOM_COUNT'),
    }


@bp_generate.route('/api/dungeon/generate', methods=['POST'])
def generate():
    """Generate a dungeon map.

    Body JSON (all optional):
      { "roomCount": 8, "gridSize": 30, "maxExitsPerRoom": 4, "roomSpacing": 1,
        "seed": "abc", "minRooms": null, "maxRooms": null, "merge": false }

    Response: { "map": {...}, "metrics": {...}, "mergedCorridors"?: [...] }
    400 on invalid settings: { "error", "field", "code" }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    ok, extra = validate(data, REQUEST_SCHEMA)
    if not ok:
        return jsonify(extra), 400
    try:
        settings = GenerationSettings.from_payload(data, defaults=_defaults_from_config())
    except InvalidSettingsError as e:
        log.info(event="generate_rejected", field=e.field, code=e.code)
        return jsonify(e.to_dict()), 400
    ctx = run_generation(settings, enable_metrics=current_app.config.get('GEOMORPH_ENABLE_GENERATION_METRICS', True))
    metrics = dict(ctx.metrics)
    metrics['analysis'] = analyze(ctx.map)
    body = {'map': ctx.map.to_dict(), 'metrics': metrics}
    if extra.get('merge'):
        body['mergedCorridors'] = [m.to_dict() for m in merge_adjacent_corridors(ctx.map.corridors)]
    return jsonify(body)


@bp_generate.route('/api/dungeon/templates', methods=['GET'])
def list_templates():
    """Room template catalog, optionally filtered with ?type=standard."""
    room_type = request.args.get('type')
    if room_type:
        try:
            templates = get_templates_by_type(RoomType(room_type))
        except ValueError:
            return jsonify({'error': f'unknown room type {room_type}', 'field': 'type', 'code': 'choice'}), 400
    else:
        templates = list(ALL_ROOM_TEMPLATES)
    return jsonify({'templates': [t.to_dict() for t in templates]})


@bp_generate.route('/api/dungeon/templates/<template_id>', methods=['GET'])
def get_template(template_id):
    template = get_template_by_id(template_id)
    if template is None:
        return jsonify({'error': 'template not found'}), 404
    return jsonify(template.to_dict())
