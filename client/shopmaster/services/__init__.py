# Overview: Service layer; session, credentials, the POS API client, rosters and forms.
