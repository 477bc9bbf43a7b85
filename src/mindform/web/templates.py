"""
HTML for server-rendered forms.

Turns RenderedControl lists into markup. All user and model text is
escaped.
"""

from html import escape

from mindform.forms.renderer import RenderedControl, RenderSession

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
</head>
<body>
<main>
{body}
</main>
</body>
</html>
"""


def render_page(title: str, body: str) -> str:
    return PAGE_TEMPLATE.format(title=escape(title), body=body)


def _render_widget(control: RenderedControl) -> str:
    fid = escape(control.field_id)
    required = " required" if control.required else ""
    invalid = ' aria-invalid="true"' if control.error else ""

    if control.widget == "select":
        options = [f'<option value="" disabled{" selected" if not control.value else ""}>'
                   f"{escape(control.placeholder or '')}</option>"]
        for option in control.options:
            selected = " selected" if option == control.value else ""
            options.append(f'<option value="{escape(option)}"{selected}>{escape(option)}</option>')
        return f'<select id="{fid}" name="{fid}"{required}{invalid}>' + "".join(options) + "</select>"

    placeholder = f' placeholder="{escape(control.placeholder)}"' if control.placeholder else ""

    if control.widget == "textarea":
        return (
            f'<textarea id="{fid}" name="{fid}" rows="{control.rows}"{placeholder}{required}{invalid}>'
            f"{escape(control.value)}</textarea>"
        )

    return (
        f'<input id="{fid}" name="{fid}" type="{escape(control.input_type or "text")}"'
        f' value="{escape(control.value)}"{placeholder}{required}{invalid}>'
    )


def render_control_html(control: RenderedControl) -> str:
    """Label, widget and inline error for one control."""
    marker = ' <span class="required">*</span>' if control.required else ""
    parts = [
        '<div class="field">',
        f'<label for="{escape(control.field_id)}">{escape(control.label)}{marker}</label>',
        _render_widget(control),
    ]
    if control.error:
        parts.append(f'<p class="error">{escape(control.error)}</p>')
    parts.append("</div>")
    return "\n".join(parts)


def render_form_page(session: RenderSession, message: str | None = None) -> str:
    """The fill-in page for a form, with current values and errors."""
    schema = session.schema
    parts = [f"<h1>{escape(schema.title)}</h1>"]
    if schema.description:
        parts.append(f'<p class="description">{escape(schema.description)}</p>')
    if not session.accepting_responses:
        parts.append('<p class="notice">This form is no longer accepting responses</p>')
    if message:
        parts.append(f'<p class="error">{escape(message)}</p>')

    action = f"/form/{escape(session.form_id)}" if session.form_id else ""
    parts.append(f'<form method="post" action="{action}">')
    parts.extend(render_control_html(control) for control in session.render())
    parts.append('<button type="submit">Submit Form</button>')
    parts.append("</form>")
    return render_page(schema.title, "\n".join(parts))


def render_submitted_page(session: RenderSession) -> str:
    body = "\n".join([
        "<h1>Form Submitted!</h1>",
        "<p>Your response has been recorded successfully</p>",
        f'<p><a href="/form/{escape(session.form_id or "")}">Submit Another</a></p>',
        '<p><a href="/">Back to Home</a></p>',
    ])
    return render_page(session.schema.title, body)


def render_home_page() -> str:
    body = "\n".join([
        "<h1>MindForm</h1>",
        "<p>Describe your form in natural language, and let AI build it.</p>",
        "<p>POST a description to <code>/api/generate</code> to create a form.</p>",
    ])
    return render_page("MindForm", body)
