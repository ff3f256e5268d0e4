import json
import math

from django.apps import apps
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render
from django.templatetags.static import static
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from coloring.application.actions import color_action, save_action, tool_action
from coloring.application.use_cases import asset_lookup
from coloring.domain.errors import ColoringError, RateLimitExceeded


class BadRequest(Exception):
    pass


# ===============================
# 🔹 AUXILIARES
# ===============================

def _app():
    return apps.get_app_config("coloring")


def _client_id(request):
    return request.META.get("REMOTE_ADDR") or "unknown"


def _payload(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except ValueError:
        raise BadRequest("Request body must be valid JSON") from None
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _point(data):
    try:
        x, y = float(data["x"]), float(data["y"])
    except (KeyError, TypeError, ValueError):
        raise BadRequest("x and y must be numbers") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise BadRequest("x and y must be finite numbers")
    return x, y


def _points(raw):
    if not isinstance(raw, list):
        raise BadRequest("points must be a list of [x, y] pairs")
    points = []
    for p in raw:
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise BadRequest("points must be a list of [x, y] pairs")
        points.append(_point({"x": p[0], "y": p[1]}))
    return points


def _error_response(error):
    if isinstance(error, BadRequest):
        return JsonResponse({"error": str(error)}, status=400)
    response = JsonResponse({"error": error.message}, status=error.status)
    if isinstance(error, RateLimitExceeded) and error.retry_after:
        response["Retry-After"] = str(int(error.retry_after + 0.999))
    return response


def _canvas_state(editor, **extra):
    state = {
        "width": editor.width,
        "height": editor.height,
        "history": len(editor.history),
        "drawing": editor.stroke is not None,
    }
    state.update(extra)
    return state


# ===============================
# 🔹 PÁGINA
# ===============================

@require_GET
def home(request):
    config = _app()
    return render(request, "coloring/canvas.html", {
        "palette": color_action.PALETTE,
        "presets": asset_lookup.PRESETS,
        "tools": config.tools.as_dict(),
        "min_brush": tool_action.MIN_BRUSH,
        "max_brush": tool_action.MAX_BRUSH,
        "width": config.editor.width,
        "height": config.editor.height,
    })


@require_GET
def health(request):
    return JsonResponse({"status": "ok", "hasOpenAiKey": _app().generator.configured})


# ===============================
# 🔹 GENERACIÓN
# ===============================

@csrf_exempt
@require_POST
def generate(request):
    """Proxy hacia el generador: {prompt} -> {success, image}."""
    config = _app()
    try:
        data = _payload(request)
        image = config.pages.generate(_client_id(request), data.get("prompt"))
    except (BadRequest, ColoringError) as e:
        return _error_response(e)
    return JsonResponse({"success": True, "image": image})


@csrf_exempt
@require_POST
def coloring_page(request):
    """
    {topic, complexity?}: busca un preset o genera el dibujo y lo carga
    como fondo del lienzo.
    """
    config = _app()
    try:
        data = _payload(request)
        page = config.pages.coloring_page(
            _client_id(request), data.get("topic"), data.get("complexity")
        )
        if page["source"] == "asset":
            source, image = page["file"], static(page["path"])
        else:
            source = image = page["image"]

        with config.editor.lock:
            config.editor.load_background(source)
            state = _canvas_state(config.editor)
    except (BadRequest, ColoringError) as e:
        return _error_response(e)

    return JsonResponse({"success": True, "source": page["source"], "image": image, "canvas": state})


# ===============================
# 🔹 LIENZO
# ===============================

@csrf_exempt
@require_POST
def canvas_background(request):
    """Carga un fondo desde {image: data URI} o {asset: preset}."""
    config = _app()
    try:
        data = _payload(request)
        if data.get("asset"):
            preset = asset_lookup.find_preset(str(data["asset"]))
            if preset is None:
                raise BadRequest(f"Unknown asset: {data['asset']}")
            source = asset_lookup.asset_file(preset, config.pages.asset_dir)
        elif isinstance(data.get("image"), str):
            source = data["image"]
        else:
            raise BadRequest("Provide an image data URI or an asset name")

        with config.editor.lock:
            config.editor.load_background(source)
            state = _canvas_state(config.editor)
    except (BadRequest, ColoringError) as e:
        return _error_response(e)
    return JsonResponse(state)


@csrf_exempt
@require_POST
def stroke_begin(request):
    config = _app()
    try:
        data = _payload(request)
        point = _point(data)
        tools = config.tools.update(
            tool=data.get("tool"), color=data.get("color"), size=data.get("size")
        )
    except BadRequest as e:
        return _error_response(e)
    except (TypeError, ValueError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    with config.editor.lock:
        changed = config.editor.begin_stroke(point, tools.tool, tools.color, tools.size)
        state = _canvas_state(config.editor, changed=bool(changed), tools=tools.as_dict())
    return JsonResponse(state)


@csrf_exempt
@require_POST
def stroke_continue(request):
    """Acepta un punto {x, y} o varios {points: [[x, y], ...]}."""
    config = _app()
    try:
        data = _payload(request)
        if "points" in data:
            points = _points(data["points"])
        else:
            points = [_point(data)]
    except BadRequest as e:
        return _error_response(e)

    with config.editor.lock:
        accepted = all([config.editor.continue_stroke(p) for p in points])
        state = _canvas_state(config.editor, accepted=accepted)
    return JsonResponse(state)


@csrf_exempt
@require_POST
def stroke_end(request):
    config = _app()
    with config.editor.lock:
        ended = config.editor.end_stroke()
        state = _canvas_state(config.editor, ended=ended)
    return JsonResponse(state)


@csrf_exempt
@require_POST
def canvas_fill(request):
    config = _app()
    try:
        data = _payload(request)
        point = _point(data)
        color = color_action.parse_color(data["color"]) if data.get("color") is not None \
            else config.tools.color
        tolerance = data.get("tolerance")
        if tolerance is not None:
            tolerance = max(0, min(255, int(tolerance)))
    except BadRequest as e:
        return _error_response(e)
    except (TypeError, ValueError, OverflowError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    with config.editor.lock:
        changed = config.editor.fill_at(point, color, tolerance)
        state = _canvas_state(config.editor, changed=changed)
    return JsonResponse(state)


@csrf_exempt
@require_POST
def canvas_undo(request):
    config = _app()
    with config.editor.lock:
        undone = config.editor.undo()
        state = _canvas_state(config.editor, undone=undone)
    return JsonResponse(state)


@csrf_exempt
@require_POST
def canvas_clear(request):
    config = _app()
    with config.editor.lock:
        config.editor.clear()
        state = _canvas_state(config.editor)
    return JsonResponse(state)


@require_GET
def canvas_frame(request):
    """PNG actual del lienzo para mostrarlo en la página."""
    config = _app()
    with config.editor.lock:
        png = config.editor.save()
    response = HttpResponse(png, content_type="image/png")
    response["Cache-Control"] = "no-store"
    return response


@require_GET
def canvas_save(request):
    """Descarga del dibujo como PNG."""
    config = _app()
    with config.editor.lock:
        png = config.editor.save()
    filename = save_action.export_filename()
    print(f"[SAVE] Dibujo exportado como {filename}")
    response = HttpResponse(png, content_type="image/png")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
