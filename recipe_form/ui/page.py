"""
Server-rendered recipe form.

The page is plain HTML forms: chips and the generate button share one form (so the
typed description travels with every toggle), the pantry upload is its own
multipart form that submits as soon as a file is picked.
"""

from __future__ import annotations

import json
from html import escape
from string import Template
from typing import Optional

from recipe_form.core.models import RESTRICTIONS, FormState
from recipe_form.core.sanitize import is_safe_image_url, sanitize_html

PAGE_HTML = Template("""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  $refresh
  <title>Recipe Generator</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
  <style>
    :root { --bg:#121212; --paper:#1e1e1e; --text:#f1f5f9; --muted:#94a3b8; --primary:#90caf9; --border:#2f2f2f; --red:#f87171; }
    * { box-sizing: border-box; font-family: Inter, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; }
    body { margin:0; background:var(--bg); color:var(--text); }
    .container { max-width: 900px; margin: 32px auto; padding: 0 16px; }
    h1 { text-align:center; font-size: 40px; margin: 0 0 24px; font-weight: 600; }
    h2 { font-size: 22px; margin: 0 0 12px; }
    .card { background: var(--paper); border:1px solid var(--border); border-radius: 12px; padding: 24px; margin-bottom: 32px; box-shadow: 0 6px 16px rgba(0,0,0,0.35); }
    .stack { display:flex; flex-direction: column; gap: 24px; }
    label.field { display:block; font-size: 13px; color: var(--muted); margin-bottom: 6px; }
    input[type=text] { width:100%; padding: 14px; border:1px solid var(--border); border-radius: 8px; background: transparent; color: var(--text); font-size: 16px; }
    .subtitle { font-size: 16px; margin-bottom: 8px; }

    /* Restriction chips */
    .chips { display:flex; flex-wrap: wrap; gap:8px; }
    .chip { padding:6px 14px; border:1px solid var(--border); border-radius:999px; background:transparent; color: var(--text); cursor:pointer; font-size: 14px; }
    .chip.active { border-color: var(--primary); background: var(--primary); color:#0b1220; }

    .btn { width:100%; border:none; border-radius: 8px; padding: 14px; font-size: 16px; font-weight: 600; cursor:pointer; }
    .btn.primary { background: var(--primary); color:#0b1220; }
    .btn.outlined { background: transparent; color: var(--primary); border:1px solid var(--primary); display:flex; align-items:center; justify-content:center; gap:8px; }
    .btn[disabled], .btn.disabled { opacity: .55; cursor: default; pointer-events: none; }
    .spinner { width:18px; height:18px; border:3px solid currentColor; border-right-color: transparent; border-radius:50%; display:inline-block; animation: spin .8s linear infinite; vertical-align: middle; margin-right: 10px; }
    @keyframes spin { to { transform: rotate(360deg); } }
    .visually-hidden { clip: rect(0 0 0 0); clip-path: inset(50%); height:1px; width:1px; overflow:hidden; position:absolute; white-space:nowrap; }

    .ingredients { margin-top: 16px; padding: 16px; border-radius: 8px; background: var(--paper); border:1px solid var(--border); }
    .recipe-image { margin-bottom: 16px; display:flex; justify-content:center; }
    .recipe-image img { width:100%; height:auto; border-radius:8px; }
    .alert { border:1px solid var(--red); color: var(--red); border-radius: 8px; padding: 12px 16px; margin-bottom: 24px; }
    .meal-plan-content { line-height: 1.55; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Recipe Generator</h1>
    $alert
    $result

    <div class="card stack">
      <form id="mealForm" method="post" action="/generate" class="stack" onsubmit="markGenerating(event)">
        <!-- first submit button: Enter in the text field generates -->
        <button type="submit" class="visually-hidden" tabindex="-1" aria-hidden="true"></button>
        <div>
          <label class="field" for="description">Describe your meal</label>
          <input type="text" id="description" name="description" value="$description"
                 placeholder="e.g., quick pasta dish, healthy salad, comfort food"/>
        </div>

        <div>
          <div class="subtitle">Dietary Restrictions:</div>
          <div class="chips">
            $chips
          </div>
        </div>
      </form>

      <form method="post" action="/pantry" enctype="multipart/form-data">
        <!-- filled from #description on pick so typed text survives the upload -->
        <input type="hidden" name="description" id="pantryDescription" value="$description"/>
        <label id="uploadLabel" class="btn outlined$upload_disabled_class">
          &#8679; <span id="uploadText">$upload_label</span>
          <input type="file" name="file" accept="image/*" class="visually-hidden"
                 onchange="startUpload(this)" $upload_disabled/>
        </label>
        <noscript><button type="submit" class="btn outlined">Upload</button></noscript>
        $ingredients
      </form>

      <button type="submit" form="mealForm" id="generateBtn" class="btn primary" $generate_disabled>$generate_label</button>
    </div>
  </div>
  <script>
    // the round trip blocks the POST, so show the pending state before the browser leaves this page
    function markGenerating(event) {
      var submitter = event.submitter;
      if (submitter && submitter.hasAttribute("formaction")) { return; }  // chip toggle
      var btn = document.getElementById("generateBtn");
      btn.disabled = true;
      btn.innerHTML = '<span class="spinner"></span>Generating your recipe...';
    }

    function startUpload(input) {
      if (!input.files || !input.files.length) { return; }
      document.getElementById("pantryDescription").value = document.getElementById("description").value;
      document.getElementById("uploadText").textContent = "Analyzing Pantry...";
      document.getElementById("uploadLabel").classList.add("disabled");
      input.form.submit();
    }
  </script>
  $alert_script
</body>
</html>
""")

CHIP_HTML = Template(
    '<button type="submit" formaction="/restrictions/toggle" name="label" value="$value" '
    'class="chip$active" aria-pressed="$pressed">$text</button>'
)


def _chips(state: FormState) -> str:
    selected = set(state.restrictions)
    return "\n            ".join(
        CHIP_HTML.substitute(
            value=escape(r, quote=True),
            text=escape(r),
            active=" active" if r in selected else "",
            pressed="true" if r in selected else "false",
        )
        for r in RESTRICTIONS
    )


def _result(state: FormState, sanitize: bool) -> str:
    if not state.has_result():
        return ""
    image = ""
    if state.image_url and (not sanitize or is_safe_image_url(state.image_url)):
        image = (
            '<div class="recipe-image">'
            f'<img src="{escape(state.image_url, quote=True)}" alt="Generated recipe" width="300" height="300"/>'
            "</div>"
        )
    meal = sanitize_html(state.meal_html) if sanitize else state.meal_html
    return (
        '<div class="card">'
        "<h2>Your Recipe:</h2>"
        f"{image}"
        f'<div class="meal-plan-content">{meal}</div>'
        "</div>"
    )


def _ingredients(state: FormState) -> str:
    if not state.pantry_ingredients:
        return ""
    return (
        '<div class="ingredients">'
        '<div class="subtitle">Detected Ingredients:</div>'
        f"<div>{escape(state.pantry_ingredients)}</div>"
        "</div>"
    )


def _alert_script(alert: str) -> str:
    # json.dumps gives a JS string literal; "</" is split so it cannot end the script block
    literal = json.dumps(alert).replace("</", "<\\/")
    return f"<script>window.alert({literal});</script>"


def render_page(state: FormState, alert: Optional[str] = None, sanitize: bool = True) -> str:
    pending = state.generating or state.analyzing
    if state.generating:
        generate_label = '<span class="spinner"></span>Generating your recipe...'
    else:
        generate_label = "Generate Recipe"
    return PAGE_HTML.substitute(
        refresh='<meta http-equiv="refresh" content="2"/>' if pending else "",
        alert=f'<div class="alert" role="alert">{escape(alert)}</div>' if alert else "",
        alert_script=_alert_script(alert) if alert else "",
        result=_result(state, sanitize),
        description=escape(state.description, quote=True),
        chips=_chips(state),
        upload_label="Analyzing Pantry..." if state.analyzing else "Upload Pantry Image",
        upload_disabled="disabled" if state.analyzing else "",
        upload_disabled_class=" disabled" if state.analyzing else "",
        ingredients=_ingredients(state),
        generate_disabled="disabled" if state.generating else "",
        generate_label=generate_label,
    )
