# spaceinvaders

A Space Invaders arcade game built on pygame. The 224×256 playfield is
drawn inside an arcade cabinet overlay that zooms in when a game starts,
with a power-on CRT animation, coloured screen bands, barriers that
crumble pixel by pixel, a mystery ship and a persistent high score.

## Installing

```
pip install .
```

The game does not ship its image and sound assets. It expects a directory
laid out as:

```
assets/
  img/    space-invaders-og-spritesheet.png, arcade-overlay.png, icon.png
  audio/  ligar_arcade.wav, desligar_arcade.wav, estatica_arcade.wav,
          canhao_tiro.wav, canhao_explosao.wav, nave_misterio.wav,
          nave_explosao.wav, nave_movimento_0.wav … nave_movimento_3.wav,
          nova_vida.wav
```

If a required file is missing, the command prints which resource could not
be initialised and exits with status 1. The icon is optional.

## Playing

```
spaceinvaders
spaceinvaders --assets path/to/assets --highscore path/to/highscore.txt
```

- `--assets` — directory holding `img/` and `audio/` (default `assets`)
- `--highscore` — file keeping the best score (default `highscore.txt`
  in the working directory; created with `0` if missing)

The game opens full screen at the desktop resolution.

On the menu:

- **Enter** — start a game
- **Esc** — quit

In game:

- **Left / Right** — move the cannon
- **Space** or **Z** — fire
- **Esc** — quit the program

Clearing a wave starts the next one with a faster fleet. Invaders in the
top row are worth 30 points, the next two rows 20 and the bottom two 10.
Every 1000 points grants an extra life, as long as the cannon has fewer
than six. Every fifteenth shot fired while no mystery ship is on screen
calls one in; it is worth 300, 150, 100 or 50 points (chances 10%, 20%,
30% and 40%). The game ends when the cannon has no lives left, or when
the invaders reach the ground or the cannon. The high score file is
updated when a game ends with a new best. Press **Enter** on the
game-over screen to return to the menu.

## Using the pieces

Much of the game logic works without opening a window:

```python
from spaceinvaders.score import points_for
from spaceinvaders.util import Hitbox
from spaceinvaders.hud import format_score

Hitbox(0, 0, 10, 10).collides(Hitbox(5, 5, 20, 20))  # True
points_for(1)                                        # 30
points_for(4, roll=25)                               # 150
format_score(70)                                     # "0070"
```

Modules:

- `spaceinvaders.util` — `Hitbox`, easing curves, random ranges,
  `alpha_mask`, `InitError` and `require`
- `spaceinvaders.sprites` — `Sprites.load` / `Sprites.from_sheet` cut
  every sprite from the sheet
- `spaceinvaders.keyboard` — `Keyboard`, which keeps short taps visible
  for one frame
- `spaceinvaders.text` — the bitmap `Font` and the `Typewriter` effect
- `spaceinvaders.sounds` — `Audio`, with `Audio.silent()` for running
  without sound
- `spaceinvaders.score` — `Score`, `points_for`, `read_highscore`
- `spaceinvaders.barrier` — destructible `Barrier`s and the `ScanLine`
- `spaceinvaders.cannon` — the player's `Cannon` and its shot
- `spaceinvaders.invaders` — the `Fleet`, mystery ship and invader shots;
  `Fleet.update` returns an `Outcome`
- `spaceinvaders.overlay` — the cabinet `Overlay` and `compute_layout`
- `spaceinvaders.display` — the window `Display` and `draw_color_bands`
- `spaceinvaders.hud` — `Hud` and `format_score`
- `spaceinvaders.menu` — the power-on animation, main menu and game-over
  typing
- `spaceinvaders.game` — `Game` ties everything together;
  `spaceinvaders.game.main` is what the `spaceinvaders` command runs

## Tests

```
pip install .[test]
pytest
```