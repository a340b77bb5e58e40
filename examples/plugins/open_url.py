"""Example plugin: opens a web page in the default browser."""

import webbrowser

from macrodeck.plugins import ActionDescriptor, PluginAction


class OpenDocs(PluginAction):
    """Opens the Stream Deck library documentation."""

    name = "Docs"
    action_id = "open-docs"
    url = "https://python-elgato-streamdeck.readthedocs.io/"

    def get_action_details(self):
        return ActionDescriptor.plugin(action_id=self.action_id, name="Open\nDocs")

    def get_configuration_control(self):
        return {"url": self.url}

    def execute(self):
        opened = webbrowser.open(self.url)
        return opened, None if opened else f"no browser available for {self.url}"
