from flexible_django.layouts import Layout


class HiddenLayout(Layout):
    name = "hidden"
    auto_load = False
