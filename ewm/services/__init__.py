# Services package.
#
#   comment_service  — CommentService: existence/publication/ownership gate
#                      in front of the comment repository
#   event_service    — event creation and the admin publish/reject action
#   user_service     — admin CRUD for User
#
# Services flush through the repositories in ``ewm.repositories`` but never
# commit; the router layer owns the transaction via the ``get_db``
# dependency.
