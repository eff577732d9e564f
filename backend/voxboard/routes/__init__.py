# Routes package init
"""
Voxboard Backend - API Routes Package
======================================

Route Inventory:
    - health.py:       GET  /                      (welcome)
                       GET  /health                (service health check)
    - soundboards.py:  POST /soundboards           (synthesize + store)
                       GET  /soundboards/{email}   (list with file status)
                       DELETE /soundboards/{id}
    - history.py:      POST /history/email         (create history)
                       POST|GET|DELETE /history/{email}
    - profile.py:      POST /profile, GET|PUT /profile/{email}
    - feedback.py:     POST /feedback, POST|GET /report
    - generate.py:     POST /generate              (Gemini text)

Routes stay thin: extract input, call a service obtained through a
dependency, wrap the result in ApiResponse. Business rules live in services.
"""
