import pygame
from tetris_config import CONFIG

class Overlay:
    """F1 panel for tuning key-repeat timings while playing."""
    def __init__(self, controller):
        self.controller=controller
        self.active=False
        self.items=[
            ("INITIAL_DELAY_MS","Repeat delay",0,600,10),
            ("REPEAT_RATE_MS","Repeat rate",10,400,5),
            ("DOWN_REPEAT_RATE_MS","Soft drop rate",10,300,5),
        ]
        self.index=0

    def toggle(self): self.active=not self.active

    def apply(self):
        self.controller.set_movement_timing(
            CONFIG["INITIAL_DELAY_MS"], CONFIG["REPEAT_RATE_MS"], CONFIG["DOWN_REPEAT_RATE_MS"])

    def handle(self,e):
        if e.key in (pygame.K_ESCAPE,pygame.K_F1): self.toggle(); return
        if e.key==pygame.K_UP: self.index=(self.index-1)%len(self.items); return
        if e.key==pygame.K_DOWN: self.index=(self.index+1)%len(self.items); return
        key,label,lo,hi,step=self.items[self.index]
        val=CONFIG[key]
        if e.key==pygame.K_LEFT: CONFIG[key]=max(lo,val-step)
        elif e.key==pygame.K_RIGHT: CONFIG[key]=min(hi,val+step)
        else: return
        self.apply()

    def draw(self,screen,font,dims):
        """Tuning panel over the board: one row per timing with a slider bar."""
        if not self.active: return
        box=pygame.Rect(dims.board_x+8,dims.board_y+dims.board_h//4,dims.board_w-16,60+len(self.items)*44)
        pygame.draw.rect(screen,(20,25,40),box)
        pygame.draw.rect(screen,(90,100,160),box,1)
        screen.blit(font.render("Tuning (F1 to close)",True,(255,255,255)),(box.x+10,box.y+10))
        bar_w=box.w-20
        for i,(key,label,lo,hi,step) in enumerate(self.items):
            top=box.y+36+i*44
            sel=i==self.index
            col=(255,230,140) if sel else (200,210,235)
            screen.blit(font.render(f"{'>' if sel else ' '} {label}: {CONFIG[key]} ms",True,col),(box.x+10,top))
            frac=(CONFIG[key]-lo)/(hi-lo)
            pygame.draw.rect(screen,(45,52,90),(box.x+10,top+20,bar_w,6))
            pygame.draw.rect(screen,col,(box.x+10,top+20,int(bar_w*frac),6))
        hint=font.render("Up/Down select, Left/Right adjust",True,(165,175,215))
        screen.blit(hint,(box.x+10,box.bottom-22))
