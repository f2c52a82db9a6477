"""
Main NiceGUI application for DAG Canvas.

Lays out the header (Save DAG / Clear / Trigger DAG), the operator palette and
the canvas. The canvas is an interactive_image whose SVG content is rebuilt by
the CanvasController after every handled event.

Save DAG and Trigger DAG are command hooks only; they notify and do nothing else.
"""

import json
import logging
import sys

from nicegui import ui
from dotenv import load_dotenv
load_dotenv()

from dagcanvas.config import get_settings
from dagcanvas.palette import TemplateCatalog, NodeTemplate
from dagcanvas.canvas import CanvasController, CanvasRenderer
from dagcanvas.canvas.handlers import setup_canvas_handlers

settings = get_settings()
logging.basicConfig(level=settings.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

catalog = TemplateCatalog(settings.templates_path)

# Global Styles
ui.add_head_html('''
    <style>
        ::-webkit-scrollbar {
            width: 8px;
            height: 8px;
        }
        ::-webkit-scrollbar-thumb {
            background: #475569; /* slate-600 */
            border-radius: 9999px;
        }
        .palette-item { cursor: move; }
        .palette-item:hover { border-color: #22d3ee; }
    </style>
''', shared=True)


def drag_start_js(template: NodeTemplate) -> str:
    """JS handler attaching the template payload to an HTML5 drag."""
    payload = json.dumps(json.dumps(template.to_payload()))
    return f"(e) => e.dataTransfer.setData('nodeType', {payload})"


# Collects what the canvas needs to compute a drop position: the payload, the
# pointer and the bounding rect and displayed size of the canvas image, all in
# CSS pixels of the viewport.
DROP_JS = '''(e) => {
    e.preventDefault();
    const img = e.currentTarget.querySelector('img') || e.currentTarget;
    const rect = img.getBoundingClientRect();
    emit({
        payload: e.dataTransfer.getData('nodeType'),
        clientX: e.clientX,
        clientY: e.clientY,
        left: rect.left,
        top: rect.top,
        width: img.clientWidth,
        height: img.clientHeight,
    });
}'''

# Forwards every mouseup on the page, so a drag ends wherever it is released.
RELEASE_JS = '''
<script>
    document.addEventListener('mouseup', () => emitEvent('canvas_pointer_release'));
</script>
'''


def render_palette(templates):
    with ui.column().classes('w-72 h-full bg-slate-50 border-r border-slate-200 p-4 overflow-y-auto gap-2'):
        ui.label('Operators').classes('text-slate-900 text-lg')
        ui.label('Drag operators to canvas').classes('text-slate-500 text-sm')
        for template in templates:
            with ui.card().classes('palette-item w-full p-3 border border-slate-200 shadow-none') \
                    .props('draggable') as card:
                ui.label(template.label).classes('text-slate-900')
                ui.label(template.description).classes('text-slate-500 text-xs')
            card.on('dragstart', js_handler=drag_start_js(template))


@ui.page('/')
def main_page():
    state = {
        'controller': CanvasController(renderer=CanvasRenderer(
            width=settings.canvas_width,
            height=settings.canvas_height,
            grid_size=settings.grid_size,
        )),
    }
    controller: CanvasController = state['controller']

    def refresh():
        state['canvas'].set_content(controller.render())
        summary = controller.summary()
        state['status'].set_text(
            f"{summary['nodes']} tasks · {summary['connections']} dependencies · {summary['roots']} roots"
            + (" · connecting…" if summary['pending_source'] else "")
        )

    handlers = setup_canvas_handlers(controller, refresh)

    def save_dag():
        ui.notify('Save DAG is not wired to a backend', position='bottom', type='info')

    def trigger_dag():
        ui.notify('Trigger DAG is not wired to a scheduler', position='bottom', type='info')

    # 1. Header
    with ui.header().classes('bg-slate-900 border-b border-slate-700 px-6 py-3 items-center justify-between'):
        with ui.column().classes('gap-0'):
            ui.label(settings.title).classes('text-white text-lg')
            ui.label('Design your data pipeline workflow').classes('text-slate-400 text-sm')
        with ui.row().classes('gap-2'):
            ui.button('Save DAG', icon='save', on_click=save_dag).props('outline color=grey-4 size=sm')
            ui.button('Clear', icon='delete', on_click=handlers['handle_clear']).props('outline color=grey-4 size=sm')
            ui.button('Trigger DAG', icon='play_arrow', on_click=trigger_dag).props('color=cyan size=sm')

    # 2. Palette + canvas
    with ui.row().classes('w-full h-[calc(100vh-80px)] gap-0 no-wrap'):
        render_palette(catalog.list_templates())

        with ui.column().classes('flex-1 h-full gap-0'):
            drop_zone = ui.element('div').classes('flex-1 w-full overflow-auto bg-white')
            drop_zone.on('dragover', js_handler='(e) => e.preventDefault()')
            drop_zone.on('drop', handlers['handle_drop'], js_handler=DROP_JS)
            with drop_zone:
                state['canvas'] = ui.interactive_image(
                    size=(settings.canvas_width, settings.canvas_height),
                    on_mouse=handlers['handle_mouse'],
                    events=['mousedown', 'mousemove', 'mouseup', 'click'],
                    cross=False,
                )
            state['status'] = ui.label().classes('text-xs text-slate-500 px-4 py-1')

    ui.add_body_html(RELEASE_JS)
    ui.on('canvas_pointer_release', handlers['handle_release'])

    refresh()
    logger.info("Canvas page ready")


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title=settings.title,
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )
