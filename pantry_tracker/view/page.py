from html import escape
from urllib.parse import quote

from .state import ViewState


PAGE_TITLE = "Pantry Tracker"

_STYLE = """
body { margin: 0; font-family: Roboto, Helvetica, Arial, sans-serif; background: #f7f9fc; }
.toolbar { position: fixed; top: 0; left: 0; right: 0; display: flex; align-items: center;
  padding: 0 24px; height: 64px; background: #1976d2; color: #fff; }
.toolbar h1 { flex-grow: 1; font-size: 1.25rem; font-weight: 500; margin: 0; }
.toolbar button { background: none; border: none; color: inherit; font-size: 0.95rem; cursor: pointer; }
main { max-width: 1100px; margin: 88px auto 24px; padding: 24px; background: #fff;
  box-shadow: 0 3px 6px rgba(0,0,0,.16); border-radius: 4px; }
main h2 { text-align: center; font-size: 2rem; font-weight: 400; }
.search input { width: 100%; box-sizing: border-box; padding: 14px; font-size: 1rem; margin-bottom: 24px; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 16px; }
.card { display: flex; flex-direction: column; align-items: center; padding: 16px;
  box-shadow: 0 1px 3px rgba(0,0,0,.2); border-radius: 4px; }
.card .quantity { color: rgba(0,0,0,.6); }
.card .controls { display: flex; gap: 8px; margin-top: 16px; }
.card button { padding: 6px 16px; border: none; border-radius: 4px; color: #fff; cursor: pointer; }
.card .add { background: #1976d2; }
.card .remove { background: #9c27b0; }
.backdrop { position: fixed; inset: 0; background: rgba(0,0,0,.5); }
.backdrop button { position: absolute; inset: 0; width: 100%; opacity: 0; cursor: default; }
.dialog { position: fixed; top: 50%; left: 50%; transform: translate(-50%, -50%); width: 400px;
  background: #fff; padding: 32px; box-shadow: 0 11px 15px rgba(0,0,0,.2); }
.dialog input { width: 100%; box-sizing: border-box; padding: 14px; font-size: 1rem; margin-bottom: 16px; }
.notification { position: fixed; bottom: 24px; left: 24px; display: flex; gap: 16px; align-items: center;
  padding: 14px 16px; background: #d32f2f; color: #fff; border-radius: 4px; }
.notification button { background: none; border: none; color: inherit; cursor: pointer; }
.empty { text-align: center; color: rgba(0,0,0,.6); }
"""

# Every card of the snapshot is in the page; keystrokes only toggle visibility
_SCRIPT = """
document.getElementById('search').addEventListener('input', function (event) {
  var term = event.target.value.toLowerCase();
  var shown = 0;
  document.querySelectorAll('.card').forEach(function (card) {
    var name = card.getAttribute('data-name').toLowerCase();
    var match = name.indexOf(term) !== -1;
    card.style.display = match ? '' : 'none';
    if (match) { shown += 1; }
  });
  document.getElementById('empty').style.display = shown ? 'none' : '';
});
"""

_HIDDEN = ' style="display:none"'


def _item_url(name: str, action: str) -> str:
    return f"/items/{quote(name, safe='')}/{action}"


def render_card(item, visible: bool = True) -> str:
    return f"""
    <div class="card" data-name="{escape(item.name)}"{'' if visible else _HIDDEN}>
      <h3>{escape(item.display_name)}</h3>
      <div class="quantity">Quantity: {item.quantity}</div>
      <div class="controls">
        <form method="post" action="{_item_url(item.name, 'add')}"><button class="add" type="submit">+ Add</button></form>
        <form method="post" action="{_item_url(item.name, 'remove')}"><button class="remove" type="submit">- Remove</button></form>
      </div>
    </div>"""


def render_dialog(state: ViewState) -> str:
    if not state.dialog_open:
        return ""
    # A single form, so pressing Enter and clicking Add submit the same request
    return f"""
  <div class="backdrop"><form method="post" action="/dialog/close"><button type="submit" aria-label="Close"></button></form></div>
  <div class="dialog" role="dialog" aria-labelledby="dialog-title">
    <h2 id="dialog-title">Add Item</h2>
    <form method="post" action="/dialog/submit">
      <input type="text" name="item_name" placeholder="Item" value="{escape(state.item_name)}" autofocus>
      <button type="submit">Add</button>
    </form>
    <form method="post" action="/dialog/close"><button type="submit">Cancel</button></form>
  </div>"""


def render_notification(state: ViewState) -> str:
    if not state.notification:
        return ""
    return f"""
  <div class="notification" role="alert">
    <span>{escape(state.notification)}</span>
    <form method="post" action="/notification/dismiss"><button type="submit">Dismiss</button></form>
  </div>"""


def render_page(state: ViewState) -> str:
    matching = {item.name for item in state.filtered_inventory}
    cards = "".join(render_card(item, item.name in matching) for item in state.inventory)
    cards += f'\n    <p id="empty" class="empty"{_HIDDEN if matching else ""}>No items found.</p>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{PAGE_TITLE}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <header class="toolbar">
    <h1>{PAGE_TITLE}</h1>
    <form method="post" action="/dialog/open"><button type="submit">+ Add New Item</button></form>
  </header>
  <main>
    <h2>Inventory Items</h2>
    <form class="search" method="get" action="/">
      <input id="search" type="search" name="q" placeholder="Search Items" value="{escape(state.search_term)}">
    </form>
    <div class="grid">{cards}
    </div>
  </main>{render_dialog(state)}{render_notification(state)}
  <script>{_SCRIPT}</script>
</body>
</html>
"""
