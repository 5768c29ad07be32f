# Overview: Flask blueprints for the console's JSON API.
