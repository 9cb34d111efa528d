from recipe_form.core.models import FormState
from recipe_form.ui.page import render_page


def test_idle_page_has_no_result_or_refresh():
    html = render_page(FormState())
    assert "Your Recipe:" not in html
    assert "Detected Ingredients:" not in html
    assert 'http-equiv="refresh"' not in html
    assert "window.alert" not in html


def test_pending_controls_are_disabled():
    html = render_page(FormState(generating=True, analyzing=True))
    assert "Generating your recipe..." in html
    assert "Analyzing Pantry..." in html
    assert 'class="btn primary" disabled>' in html
    assert 'http-equiv="refresh"' in html


def test_chips_render_in_canonical_order():
    html = render_page(FormState(restrictions=["Keto", "Vegetarian"]))
    assert html.index('value="Vegetarian"') < html.index('value="Vegan"') < html.index('value="Keto"')
    assert html.count('class="chip active"') == 2


def test_user_text_is_escaped():
    html = render_page(FormState(description='"><b>x', pantry_ingredients="<i>eggs</i>"))
    assert 'value="&quot;&gt;&lt;b&gt;x"' in html
    assert "&lt;i&gt;eggs&lt;/i&gt;" in html


def test_alert_cannot_break_out_of_script():
    html = render_page(FormState(), alert="</script><b>")
    assert "window.alert(\"<\\/script><b>\")" in html


def test_generate_submit_disables_button_before_leaving_page():
    html = render_page(FormState())
    assert '<form id="mealForm" method="post" action="/generate" class="stack" onsubmit="markGenerating(event)">' in html
    assert 'id="generateBtn"' in html
    script = html[html.index("function markGenerating"):]
    assert "btn.disabled = true;" in script
    assert "Generating your recipe..." in script
    # chip toggles submit the same form and must not look like generation
    assert 'hasAttribute("formaction")' in script


def test_upload_pick_shows_analyzing_and_carries_description():
    html = render_page(FormState(description="leftover rice"))
    assert 'onchange="startUpload(this)"' in html
    assert '<input type="hidden" name="description" id="pantryDescription" value="leftover rice"/>' in html
    script = html[html.index("function startUpload"):]
    assert 'getElementById("pantryDescription").value = document.getElementById("description").value' in script
    assert '"Analyzing Pantry..."' in script
