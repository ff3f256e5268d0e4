from django.urls import path

from coloring.infrastructure.django import views

urlpatterns = [
    # --- Página ---
    path("", views.home, name="home"),

    # --- API de generación ---
    path("api/health", views.health, name="health"),
    path("api/generate", views.generate, name="generate"),
    path("api/coloring-page", views.coloring_page, name="coloring_page"),

    # --- Lienzo ---
    path("api/canvas/background", views.canvas_background, name="canvas_background"),
    path("api/canvas/stroke/begin", views.stroke_begin, name="stroke_begin"),
    path("api/canvas/stroke/continue", views.stroke_continue, name="stroke_continue"),
    path("api/canvas/stroke/end", views.stroke_end, name="stroke_end"),
    path("api/canvas/fill", views.canvas_fill, name="canvas_fill"),
    path("api/canvas/undo", views.canvas_undo, name="canvas_undo"),
    path("api/canvas/clear", views.canvas_clear, name="canvas_clear"),
    path("api/canvas/frame", views.canvas_frame, name="canvas_frame"),
    path("api/canvas/save", views.canvas_save, name="canvas_save"),
]
