from __future__ import annotations

APP_CSS = """
Screen {
    background: $background;
    color: $text;
}

#entries {
    width: 3fr;
    height: 1fr;
}

#side-panel {
    width: 2fr;
    height: 1fr;
    padding: 0 1;
}

.entry {
    height: auto;
    padding: 0 1;
}

.entry.even {
    background: $panel;
}

.grist-row {
    height: auto;
}

.item-input {
    width: 32;
}

.grist-input {
    width: 24;
}

.amount-input {
    width: 12;
}

Input.invalid {
    color: $error;
}

#errors {
    height: 1fr;
}

.error-invalid {
    color: $error;
}
"""
